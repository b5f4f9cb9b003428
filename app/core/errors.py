# app/core/errors.py
from fastapi import HTTPException

ERR_NUMERO_REQUIRED = "Informe o número"
ERR_NOT_FOUND = "Nota não encontrada"
ERR_UPLOAD_FIELDS = "Campos obrigatórios: numeroEnvio e arquivo"
ERR_UPLOAD_FAILED = "Falha interna ao enviar"
ERR_ROUTE_NOT_FOUND = "Rota não encontrada"
ERR_BAD_REQUEST = "Requisição inválida"
ERR_INTERNAL = "Falha interna"


class ApiError(HTTPException):
    """HTTPException whose detail is the message shown to the client as `erro`."""

    def __init__(self, status_code: int, erro: str):
        super().__init__(status_code=status_code, detail=erro)


def error_body(erro: str) -> dict:
    return {"ok": False, "erro": erro}
