"""
Service context for log lines.

Identifies which deployment and which worker wrote a line, across
container tasks, serverless invocations and local runs.
"""

import os
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME') or os.getenv(
        'AWS_LAMBDA_FUNCTION_NAME', 'event-lifecycle-service'
    )
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Lambda log stream looks like: 2024/01/01/[$LATEST]0123456789abcdef
    log_stream = os.getenv('AWS_LAMBDA_LOG_STREAM_NAME', '')
    if log_stream:
        worker_id = log_stream.rsplit(']', 1)[-1][:8] or 'lambda'
    else:
        worker_id = os.getenv('HOSTNAME', '')[:12] or str(os.getpid())

    return f'{service_name}@{deploy_env}:{worker_id}'
