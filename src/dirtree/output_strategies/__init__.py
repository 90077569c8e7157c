"""Output strategies that render a built tree in each supported format."""

from dirtree.config import TreeConfig
from dirtree.types import OutputFormat

from .base_strategy import OutputStrategy
from .json_strategy import JSONOutputStrategy
from .text_strategy import TextOutputStrategy
from .toon_strategy import TOONOutputStrategy

__all__ = [
    "JSONOutputStrategy",
    "OutputStrategy",
    "TOONOutputStrategy",
    "TextOutputStrategy",
    "get_output_strategy",
]


def get_output_strategy(config: TreeConfig, use_color: bool = False) -> OutputStrategy:
    """Select the renderer for the configured output format.

    Color only ever applies to text output.

    Args:
        config: Options for the run; config.output_format picks the strategy.
        use_color: Whether text output should be colorized.

    Returns:
        The strategy instance for this run.

    Raises:
        ValueError: If the output format is not supported.

    Example:
        >>> type(get_output_strategy(TreeConfig(output_format="toon"))).__name__
        'TOONOutputStrategy'
    """
    if config.output_format is OutputFormat.TEXT:
        return TextOutputStrategy(config, use_color=use_color)
    if config.output_format is OutputFormat.JSON:
        return JSONOutputStrategy(config)
    if config.output_format is OutputFormat.TOON:
        return TOONOutputStrategy(config)
    raise ValueError(f"Unsupported output format: {config.output_format}")
