"""
Service identification for log lines: `<service>@<env>:<instance>`.
"""

from functools import lru_cache
import os
import socket


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'cinema-reservation')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Containers get a stable hostname; local runs fall back to the PID
    instance = os.getenv('HOSTNAME') or socket.gethostname() if deploy_env != 'local_dev' else ''
    instance = instance[:12] if instance else str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance}'
