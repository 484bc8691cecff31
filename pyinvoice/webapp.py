import io
import logging
import os
import re
import uuid

from flask import (
    Flask,
    abort,
    jsonify,
    render_template,
    request,
    send_file,
    url_for,
)
from flask_wtf import CSRFProtect

from .config import load_settings
from .core import convert_to_excel
from .errors import DocumentReadError
from .record import record_to_json
from .utils import upload_name

settings = load_settings()

app = Flask(__name__)
app.secret_key = settings["secret_key"]
app.config["PYINVOICE_SETTINGS"] = settings
app.config["OUTPUT_DIR"] = settings["output_dir"]
csrf = CSRFProtect(app)

_TOKEN_RE = re.compile(r"[0-9a-f]{32}")


def _workbook_path(token: str) -> str:
    return os.path.join(app.config["OUTPUT_DIR"], f"{token}.xlsx")


@app.route("/")
def index():
    return render_template("index.html")


@app.route("/upload", methods=["POST"])
def upload():
    """Convert every uploaded PDF as one batch into its own workbook."""
    files = [f for f in request.files.getlist("pdf") if f and f.filename]
    if not files:
        return jsonify({"error": "No PDF file uploaded"}), 400

    names = [upload_name(f.filename) for f in files]
    sources = [f.read() for f in files]
    token = uuid.uuid4().hex
    path = _workbook_path(token)
    logging.info("Upload %s of %d files: %s", token, len(files), ", ".join(names))
    os.makedirs(app.config["OUTPUT_DIR"], exist_ok=True)
    try:
        records = convert_to_excel(
            sources,
            path,
            app.config["PYINVOICE_SETTINGS"],
            names=names,
        )
    except DocumentReadError as exc:
        logging.error("Upload %s aborted: %s", token, exc)
        return jsonify({"error": "Cannot read document", "file": exc.source}), 422

    return jsonify(
        {
            "count": len(records),
            "records": [record_to_json(r) for r in records],
            "download": url_for("download", token=token),
        }
    )


@app.route("/download/<token>")
def download(token):
    """Send the workbook of one upload and remove it."""
    if not _TOKEN_RE.fullmatch(token):
        abort(404)
    path = _workbook_path(token)
    if not os.path.exists(path):
        abort(404)
    with open(path, "rb") as fh:
        data = io.BytesIO(fh.read())
    os.remove(path)
    logging.info("Workbook %s downloaded and removed", path)
    return send_file(
        data,
        as_attachment=True,
        download_name="invoices.xlsx",
        mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )


if __name__ == "__main__":
    app.run(debug=True)
