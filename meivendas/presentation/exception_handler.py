# meivendas/presentation/exception_handler.py
"""
Tradução central das exceções do Core em respostas HTTP (DRF EXCEPTION_HANDLER).
Toda resposta de erro tem o formato {"message": "..."}.
"""
import logging

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from meivendas.core.exceptions import (
    AcessoNegadoError,
    BaseErroCore,
    CredenciaisInvalidasError,
    DadosInvalidosError,
    ItemNaoEncontradoError,
    PersistenciaError,
)

logger = logging.getLogger(__name__)

# Venda inexistente e venda alheia respondem igual (404)
STATUS_POR_ERRO = (
    (DadosInvalidosError, status.HTTP_400_BAD_REQUEST),
    (ItemNaoEncontradoError, status.HTTP_404_NOT_FOUND),
    (AcessoNegadoError, status.HTTP_404_NOT_FOUND),
    (CredenciaisInvalidasError, status.HTTP_401_UNAUTHORIZED),
    (PersistenciaError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def meivendas_exception_handler(exc, context):
    if isinstance(exc, BaseErroCore):
        if isinstance(exc, PersistenciaError):
            # traceback já registrado no repositório
            view = context.get('view')
            logger.warning(
                "Requisição em %s respondida com 503.", view.__class__.__name__ if view else "?",
            )
        codigo = next(
            (codigo for tipo, codigo in STATUS_POR_ERRO if isinstance(exc, tipo)),
            status.HTTP_400_BAD_REQUEST,
        )
        return Response({'message': exc.message}, status=codigo)

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, ValidationError):
        response.data = {'message': 'Dados inválidos.', 'errors': response.data}
    elif isinstance(response.data, dict) and 'detail' in response.data:
        response.data = {'message': str(response.data['detail'])}
    return response
