import datetime as dt
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from fastapi.responses import FileResponse

from defect_tracker.core.deps import get_db, get_current_user, require_roles
from defect_tracker.core.policy import REPORT_EXPORTERS
from defect_tracker.schemas.reports import DefectReportOut, DashboardOut
from defect_tracker.services.reports.service import defect_report, dashboard as dashboard_calc
from defect_tracker.services.exports.exporter import export_defects_xlsx, export_report_pdf
from defect_tracker.services.files import default_export_path

router = APIRouter()


def _report_or_400(db: Session, project_id: int | None, date_from: dt.date | None, date_to: dt.date | None) -> dict:
    if date_from and date_to and date_from > date_to:
        raise HTTPException(status_code=400, detail="startDate must not be after endDate")
    return defect_report(db, project_id=project_id, date_from=date_from, date_to=date_to)


@router.get("", response_model=DefectReportOut)
def report(
    project_id: int | None = Query(None, alias="projectId"),
    date_from: dt.date | None = Query(None, alias="startDate"),
    date_to: dt.date | None = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
    _user=Depends(get_current_user),
):
    return _report_or_400(db, project_id, date_from, date_to)


@router.get("/dashboard", response_model=DashboardOut)
def dashboard(db: Session = Depends(get_db), _user=Depends(get_current_user)):
    return dashboard_calc(db)


@router.get("/export/defects.xlsx")
def export_defects(
    project_id: int | None = Query(None, alias="projectId"),
    date_from: dt.date | None = Query(None, alias="startDate"),
    date_to: dt.date | None = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
    _user=Depends(require_roles(*REPORT_EXPORTERS)),
):
    data = _report_or_400(db, project_id, date_from, date_to)
    out = default_export_path("defects", "xlsx")
    export_defects_xlsx(data, out)
    return FileResponse(str(out), media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet", filename=out.name)


@router.get("/export/summary.pdf")
def export_summary(
    project_id: int | None = Query(None, alias="projectId"),
    date_from: dt.date | None = Query(None, alias="startDate"),
    date_to: dt.date | None = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
    _user=Depends(require_roles(*REPORT_EXPORTERS)),
):
    data = _report_or_400(db, project_id, date_from, date_to)
    out = default_export_path("defect_summary", "pdf")
    export_report_pdf(data, out)
    return FileResponse(str(out), media_type="application/pdf", filename=out.name)
