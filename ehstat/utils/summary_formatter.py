"""Build template context for scan summaries and render it with Jinja2."""

from pathlib import Path
from typing import Any, Optional, Sequence

from jinja2 import Environment, FileSystemLoader

from ..analysis.metrics import round_half_up
from ..core.models import SummaryStatistics

DEFAULT_TEMPLATE = Path(__file__).parent / 'templates' / 'scan_summary.j2'

# Decimal places used for statistics in the summary
SUMMARY_PLACES = 4


def format_breakpoint(value: float) -> str:
    """Render a histogram breakpoint without a trailing .0."""
    return f"{value:g}"


def build_summary_context(
    stats: Optional[SummaryStatistics],
    total_files: int,
    metric_label: str = 'EH_Frame',
) -> dict[str, Any]:
    """
    Build template context from summary statistics.

    Args:
        stats: Statistics over the collected ratios, or None if nothing was analyzed
        total_files: Number of files successfully analyzed
        metric_label: Name of the measured ratio

    Returns:
        Dictionary with template variables:
        - total_files: Number of files analyzed
        - metric_label: Name of the measured ratio
        - stats: Rounded min/max/mean/median, or None
        - buckets: List of {label, lower, upper, count}
    """
    context: dict[str, Any] = {
        'total_files': total_files,
        'metric_label': metric_label,
        'stats': None,
        'buckets': [],
    }
    if stats is None:
        return context

    context['stats'] = {
        'min': round_half_up(stats.minimum, SUMMARY_PLACES),
        'max': round_half_up(stats.maximum, SUMMARY_PLACES),
        'mean': round_half_up(stats.mean, SUMMARY_PLACES),
        'median': round_half_up(stats.median, SUMMARY_PLACES),
    }
    context['buckets'] = [
        {
            'label': f"{format_breakpoint(bucket.lower)}%-{format_breakpoint(bucket.upper)}%",
            'lower': bucket.lower,
            'upper': bucket.upper,
            'count': bucket.count,
        }
        for bucket in stats.histogram
    ]
    return context


def render_jinja2_template(template_path: str, context: dict) -> str:
    """Load and render a Jinja2 template.

    Raises:
        FileNotFoundError: If template file doesn't exist
        jinja2.TemplateError: If template has syntax errors
    """
    template_file = Path(template_path)
    if not template_file.exists():
        raise FileNotFoundError(f"Template file not found: {template_path}")

    env = Environment(
        loader=FileSystemLoader(template_file.parent),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    template = env.get_template(template_file.name)
    return template.render(**context)


def render_summary(stats: Optional[SummaryStatistics], total_files: int,
                   template_path: Optional[str] = None,
                   metric_label: str = 'EH_Frame') -> str:
    """Render the scan summary with the default or a custom template."""
    context = build_summary_context(stats, total_files, metric_label)
    return render_jinja2_template(template_path or str(DEFAULT_TEMPLATE), context)


def breakpoints_label(breakpoints: Sequence[float]) -> str:
    """Comma-separated breakpoints, as accepted by --buckets."""
    return ','.join(format_breakpoint(value) for value in breakpoints)
