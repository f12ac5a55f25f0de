from .plotting_config import DEFAULT_PLOT_CFG, PlottingConfig
from .sources import DEFAULT_SOURCE, SourceConfig, get_dataset_source


__all__ = [
    "DEFAULT_PLOT_CFG",
    "DEFAULT_SOURCE",
    "PlottingConfig",
    "SourceConfig",
    "get_dataset_source",
]
