"""
Browser front-end for spreadsheet uploads.

Route
    GET  /
Returns a single page that lets a user pick or drop an Excel file and posts it
to ``/api/upload``. All processing happens in the upload route.
"""
import json

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from sheet_upload.api.routes.upload import UPLOAD_PATH

router = APIRouter()

_FORM_HTML = """
<!doctype html>
<html lang="pt-BR">
<head>
<meta charset="utf-8">
<title>Análise de planilhas</title>
<style>
  body { font-family: sans-serif; max-width: 40rem; margin: 4rem auto; text-align: center; }
  #drop { border: 2px dashed #888; border-radius: 8px; padding: 3rem 1rem; cursor: pointer; }
  #drop.active { border-color: #2563eb; background: #eff6ff; }
  #file { display: none; }
  .error { color: #b91c1c; }
  .success { color: #15803d; }
  button { margin-top: 1rem; padding: .5rem 2rem; }
</style>
</head>
<body>
<h1>Tudo o que você precisa saber sobre os dados dos processos em um só lugar</h1>
<h3>Carregue sua planilha para análise</h3>
<form id="form">
  <div id="drop">
    <input type="file" id="file" name="file" accept=".xlsx, .xls">
    <p id="label">Arraste e solte o arquivo aqui ou clique para selecionar</p>
  </div>
  <p id="message"></p>
  <button type="submit" id="submit">Enviar</button>
</form>
<script>
const ALLOWED = __ALLOWED_TYPES__;
const UPLOAD_URL = "__UPLOAD_URL__";
const drop = document.getElementById("drop");
const input = document.getElementById("file");
const label = document.getElementById("label");
const message = document.getElementById("message");
const submit = document.getElementById("submit");
let file = null;

function show(text, kind) { message.textContent = text; message.className = kind || ""; }
function pick(f) { file = f; label.textContent = f.name; show(""); }

drop.addEventListener("click", () => input.click());
input.addEventListener("change", () => { if (input.files.length) pick(input.files[0]); });
drop.addEventListener("dragover", (e) => { e.preventDefault(); drop.classList.add("active"); });
drop.addEventListener("dragleave", (e) => { e.preventDefault(); drop.classList.remove("active"); });
drop.addEventListener("drop", (e) => {
  e.preventDefault();
  drop.classList.remove("active");
  if (e.dataTransfer.files.length) pick(e.dataTransfer.files[0]);
});

document.getElementById("form").addEventListener("submit", async (e) => {
  e.preventDefault();
  if (!file) { show("Por favor, selecione um arquivo.", "error"); return; }
  if (!ALLOWED.includes(file.type)) {
    show("Tipo de arquivo não suportado. Por favor, envie um arquivo Excel (.xls ou .xlsx).", "error");
    return;
  }
  const body = new FormData();
  body.append("file", file);
  submit.disabled = true;
  submit.textContent = "Enviando...";
  show("");
  try {
    const response = await fetch(UPLOAD_URL, { method: "POST", body });
    let data = null;
    try { data = await response.json(); } catch (err) { data = null; }
    if (!response.ok) {
      throw new Error((data && data.error) || "Erro ao enviar o arquivo.");
    }
    show((data && data.data) || "Arquivo enviado e processado com sucesso!", "success");
    file = null;
    input.value = "";
    label.textContent = "Arraste e solte o arquivo aqui ou clique para selecionar";
  } catch (err) {
    show(err.message || "Erro ao enviar o arquivo. Por favor, tente novamente.", "error");
  } finally {
    submit.disabled = false;
    submit.textContent = "Enviar";
  }
});
</script>
</body>
</html>
"""

def render_form(allowed_types: list[str], upload_url: str) -> str:
    return _FORM_HTML.replace("__ALLOWED_TYPES__", json.dumps(allowed_types)).replace("__UPLOAD_URL__", upload_url)

@router.get("/", include_in_schema=False, response_class=HTMLResponse)
def upload_form(request: Request) -> HTMLResponse:
    """Serve the upload form."""
    config = request.app.state.upload_handler.config
    return HTMLResponse(render_form(config.allowed_content_types, UPLOAD_PATH))
