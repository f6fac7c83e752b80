"""
Configuração centralizada de logging
Logger AWS Lambda Powertools (JSON estruturado) com service name do Datadog
"""
import os
from typing import Optional

from aws_lambda_powertools import Logger

DEFAULT_SERVICE_NAME = 'weathapp'


def get_logger(service_name: Optional[str] = None, child: bool = False) -> Logger:
    """
    Retorna uma instância configurada do Logger

    Args:
        service_name: Nome do serviço (se None, usa DD_SERVICE do ambiente)
        child: Se True, cria um child logger que herda chaves do logger principal

    Returns:
        Logger configurado
    """
    if service_name is None:
        service_name = os.environ.get('DD_SERVICE', DEFAULT_SERVICE_NAME)

    level = os.environ.get('LOG_LEVEL', 'INFO').upper()

    if child:
        return Logger(service=service_name, child=True)

    return Logger(service=service_name, level=level)


def bind_session(user_id: Optional[str]) -> None:
    """
    Anexa (ou remove) o usuário autenticado em todos os logs da sessão

    Args:
        user_id: Identificador opaco do usuário; None remove a chave
    """
    if user_id:
        logger.append_keys(user_id=user_id)
    else:
        logger.remove_keys(['user_id'])


# Logger principal da aplicação
logger = get_logger()
