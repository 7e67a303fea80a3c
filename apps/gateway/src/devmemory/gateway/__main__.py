"""网关启动入口 -- python -m devmemory.gateway

启动失败（存储不可达）时 uvicorn 以非零状态码退出。
"""

import uvicorn

from .config import load_gateway_config


def main() -> None:
    config = load_gateway_config()
    uvicorn.run(
        "devmemory.gateway.main:app",
        host=config.host,
        port=config.port,
        lifespan="on",
        log_config=None,
    )


if __name__ == "__main__":
    main()
