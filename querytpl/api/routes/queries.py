from fastapi import APIRouter

from querytpl.api.deps import DatabaseDep
from querytpl.engines.sql import check_template_safety, parse_placeholders
from querytpl.schemas import CompileIn, CompileOut, InspectIn, InspectOut, TemplateWarning

router = APIRouter(prefix="/queries", tags=["queries"])


@router.post("/compile", response_model=CompileOut)
def compile_template(db: DatabaseDep, body: CompileIn) -> CompileOut:
    """
    Compile a query template with positional arguments into final SQL.
    """
    return CompileOut(sql=db.build_query(body.template, body.resolved_args()))


@router.post("/inspect", response_model=InspectOut)
def inspect_template(body: InspectIn) -> InspectOut:
    """
    List placeholder tokens in binding order and warn about suspicious constructs.
    """
    return InspectOut(
        placeholders=parse_placeholders(body.template),
        warnings=[TemplateWarning(**w) for w in check_template_safety(body.template)],
    )
