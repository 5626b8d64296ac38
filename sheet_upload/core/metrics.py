from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

UPLOADS = Counter("uploads_total", "Spreadsheet uploads handled", ["outcome"])
UPLOAD_ROWS = Histogram(
    "upload_rows",
    "Rows parsed per successful upload",
    buckets=(1, 10, 100, 1_000, 10_000, 100_000),
)

def increment_counter(name: str, labels: dict | None = None):
    if name == "uploads_total":
        UPLOADS.labels(**(labels or {})).inc()

def observe(name: str, value: float):
    if name == "upload_rows":
        UPLOAD_ROWS.observe(value)

def render_latest() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST
