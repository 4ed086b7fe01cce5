from headergrade.core.config.settings import AnalyzerConfig, load_config

__all__ = ["AnalyzerConfig", "load_config"]
