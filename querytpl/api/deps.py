from collections.abc import Generator
from typing import Annotated

from fastapi import Depends

from querytpl.core import db
from querytpl.engines.sql import Database


def get_database() -> Generator[Database, None, None]:
    conn = db.connect()
    try:
        yield Database(conn)
    finally:
        db.close(conn)


DatabaseDep = Annotated[Database, Depends(get_database)]
