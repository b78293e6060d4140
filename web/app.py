"""
Web API for the flight statistics.

Upload a flight list (Excel, CSV or TSV) and get back the statistics as
JSON plus CSV and Excel reports for download.

Usage:
    python -m uvicorn web.app:app --reload
    # Open http://localhost:8000
"""

import os
import sys
import uuid
import shutil
import tempfile
from io import StringIO
from pathlib import Path

from fastapi import FastAPI, UploadFile, File, Form, HTTPException
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse

# Ensure project root is on the path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from flightstat.csv_report import create_csv_report
from flightstat.flight_importer import read_flights
from flightstat.statistics import FlightStat, UNKNOWN_GLIDER
from flightstat.xlsx_report import create_xlsx_report

app = FastAPI(title="Flight Statistics")

ALLOWED_EXTENSIONS = ('.xlsx', '.xlsm', '.csv', '.tsv', '.txt')

DOWNLOADS = {
    'csv': ('text/csv', 'Flight_Statistics.csv'),
    'xlsx': ('application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
             'Flight_Statistics.xlsx'),
}

# Store completed jobs for download (job_id -> report paths), oldest first
_jobs = {}

# Finished jobs kept for download; older ones are deleted with their files
MAX_JOBS = 20


def _prune_jobs(keep):
    """Drop the oldest jobs and their work directories until at most `keep` remain."""
    while len(_jobs) > max(keep, 0):
        job = _jobs.pop(next(iter(_jobs)))
        shutil.rmtree(job['work_dir'], ignore_errors=True)


@app.get("/", response_class=HTMLResponse)
async def index():
    """Serve the main upload page."""
    html_path = Path(__file__).parent / "index.html"
    return HTMLResponse(html_path.read_text(encoding="utf-8"))


@app.post("/api/statistics")
async def statistics(
    file: UploadFile = File(...),
    default_glider: str = Form(UNKNOWN_GLIDER),
    gliders: bool = Form(True),
):
    """Build flight statistics from an uploaded flight list.

    Returns JSON with the totals, the ordered report rows and download URLs
    for the CSV and Excel reports.
    """
    if not file.filename:
        raise HTTPException(400, "No file uploaded")

    ext = os.path.splitext(file.filename)[1].lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(400, f"Unsupported file type: {ext}. Use Excel, CSV or TSV.")

    job_id = str(uuid.uuid4())[:8]
    work_dir = tempfile.mkdtemp(prefix=f"flightstat_{job_id}_")

    try:
        upload_path = os.path.join(work_dir, os.path.basename(file.filename))
        with open(upload_path, "wb") as f:
            f.write(await file.read())

        csv_path = os.path.join(work_dir, "Flight_Statistics.csv")
        xlsx_path = os.path.join(work_dir, "Flight_Statistics.xlsx")

        # Capture stdout
        old_stdout = sys.stdout
        sys.stdout = log_capture = StringIO()
        try:
            flights, info = read_flights(upload_path)
            stat = FlightStat.build(flights, default_glider, gliders)
            create_csv_report(flights, stat, csv_path)
            create_xlsx_report(flights, stat, xlsx_path)
        finally:
            sys.stdout = old_stdout

        _jobs[job_id] = {
            'csv': csv_path,
            'xlsx': xlsx_path,
            'work_dir': work_dir,
        }
        _prune_jobs(MAX_JOBS)

        return JSONResponse({
            'success': True,
            'job_id': job_id,
            'format_detected': info['format'],
            'skipped_rows': info['skipped'],
            'stats': stat.summary(),
            'rows': [
                {'label': row.label, 'flights': row.flights,
                 'minutes': row.minutes, 'kind': row.kind}
                for row in stat.rows()
            ],
            'log': log_capture.getvalue(),
            'download_url': f'/api/download/{job_id}/csv',
            'xlsx_url': f'/api/download/{job_id}/xlsx',
        })

    except ValueError as e:
        shutil.rmtree(work_dir, ignore_errors=True)
        return JSONResponse(
            status_code=400,
            content={'success': False, 'error': str(e)},
        )
    except Exception as e:
        shutil.rmtree(work_dir, ignore_errors=True)
        return JSONResponse(
            status_code=500,
            content={'success': False, 'error': str(e)},
        )


@app.get("/api/download/{job_id}/{kind}")
async def download(job_id: str, kind: str):
    """Download the CSV or Excel report of a job."""
    job = _jobs.get(job_id)
    if kind not in DOWNLOADS or not job or not os.path.exists(job[kind]):
        raise HTTPException(404, "File not found or expired")

    media_type, filename = DOWNLOADS[kind]
    return FileResponse(job[kind], media_type=media_type, filename=filename)
