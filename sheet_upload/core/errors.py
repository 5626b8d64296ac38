"""Upload failures and the messages shown to the person uploading."""

SUCCESS_MESSAGE = "Arquivo processado com sucesso!"


class UploadError(Exception):
    """Base for every failure reported back as ``{"error": message}``."""

    status_code = 400
    outcome = "error"
    default_message = "Erro ao processar o arquivo."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NoFileProvided(UploadError):
    outcome = "no_file"
    default_message = "Nenhum arquivo foi enviado."


class UnsupportedFileType(UploadError):
    outcome = "unsupported_type"
    default_message = "Tipo de arquivo não suportado."


class FileTooLarge(UploadError):
    outcome = "too_large"

    def __init__(self, max_size_bytes: int):
        self.max_size_bytes = max_size_bytes
        super().__init__(f"Arquivo excede o tamanho máximo de {max_size_bytes / 1024 / 1024:g} MB.")


class EmptySpreadsheet(UploadError):
    outcome = "empty"
    default_message = "A planilha está vazia."


class ParseFailure(UploadError):
    outcome = "parse_failure"


class MethodNotAllowed(UploadError):
    status_code = 405
    outcome = "method_not_allowed"

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"Método {method} não permitido.")
