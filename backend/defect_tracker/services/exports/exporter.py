from pathlib import Path
import pandas as pd
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas
from reportlab.lib.units import mm

DEFECT_COLUMNS = [
    "id", "title", "status", "priority", "project", "site",
    "creator", "assignee", "created_at", "deadline",
]

def _person(u) -> str:
    if u is None:
        return ""
    return u.name or u.email

def defects_frame(report: dict) -> pd.DataFrame:
    rows = [
        {
            "id": d.id,
            "title": d.title,
            "status": d.status.value,
            "priority": d.priority.value,
            "project": d.site.project.name,
            "site": d.site.name,
            "creator": _person(d.creator),
            "assignee": _person(d.assignee),
            # Excel cannot store tz-aware datetimes
            "created_at": d.created_at.replace(tzinfo=None),
            "deadline": d.deadline,
        }
        for d in report["defects"]
    ]
    return pd.DataFrame(rows, columns=DEFECT_COLUMNS)

def export_defects_xlsx(report: dict, out_path: Path):
    df = defects_frame(report)
    by_status = pd.DataFrame(report["status_stats"], columns=["status", "count"])
    by_priority = pd.DataFrame(report["priority_stats"], columns=["priority", "count"])
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(out_path, engine="xlsxwriter") as w:
        df.to_excel(w, index=False, sheet_name="defects")
        by_status.to_excel(w, index=False, sheet_name="by_status")
        by_priority.to_excel(w, index=False, sheet_name="by_priority")
    return out_path

def export_report_pdf(report: dict, out_path: Path, title: str = "Defect Report"):
    out_path.parent.mkdir(parents=True, exist_ok=True)
    c = canvas.Canvas(str(out_path), pagesize=A4)
    width, height = A4
    y = height - 20*mm
    c.setFont("Helvetica-Bold", 14)
    c.drawString(20*mm, y, title)
    y -= 10*mm
    c.setFont("Helvetica", 11)
    lines = [
        f"Generated: {report['generated_at']:%Y-%m-%d %H:%M} UTC",
        f"Total defects: {report['total_defects']}",
        "",
        "By status:",
        *[f"  {row['status']}: {row['count']}" for row in report["status_stats"]],
        "",
        "By priority:",
        *[f"  {row['priority']}: {row['count']}" for row in report["priority_stats"]],
        "",
        "By site:",
        *[f"  {row['site_name']} ({row['project_name']}): {row['count']}" for row in report["site_stats"]],
    ]
    for ln in lines:
        if y < 20*mm:
            c.showPage()
            c.setFont("Helvetica", 11)
            y = height - 20*mm
        c.drawString(20*mm, y, ln)
        y -= 7*mm
    c.showPage()
    c.save()
    return out_path
