from .options import ServeOptions

PRIMARY = "primary"
UI = "ui"


def server_address(options: ServeOptions, role: str = PRIMARY) -> str:
    scheme = "https" if options.use_https else "http"
    port = options.ui_port if role == UI else options.port
    base = f"{options.base_url}/" if options.base_url else ""
    return f"{scheme}://{options.host}:{port}{base}"
