from dataclasses import dataclass


@dataclass
class CLIOptions:
    single: str | None = None
    batch: str | None = None
    serve: bool = False
    max_concurrent: int = 8
    ignore_cache: bool = False
    output_dir: str = "results"
    format: str = "html"
    rules_file: str | None = None
    method: str | None = None
    timeout: int | None = None
    host: str = "127.0.0.1"
    port: int = 5000
    log_level: str | None = None
