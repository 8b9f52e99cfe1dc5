import logging
from pathlib import Path
from typing import Any, List

from ..analyzers.base import CheckReport
from ..checker import PAIR_THRESHOLDS

logger = logging.getLogger(__name__)


def generate_figures(report: CheckReport, output_dir: Path, dpi: int = 300) -> List[Path]:
    """Generate static publication-ready figures using matplotlib."""
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    plt.style.use("seaborn-v0_8-whitegrid")

    generated = []

    fig = _create_score_figure(report)
    if fig:
        for ext in ["png", "pdf"]:
            path = output_dir / f"similarity_scores.{ext}"
            fig.savefig(path, dpi=dpi, bbox_inches="tight", facecolor="white")
            generated.append(path)
        plt.close(fig)

    logger.info(f"Generated {len(generated)} figure files")
    return generated


def _create_score_figure(report: CheckReport) -> Any:
    """Horizontal grouped bars of Jaccard, Cosine and Combined per reference."""
    import matplotlib.pyplot as plt

    if not report.comparisons:
        return None

    names = [Path(c.reference).name for c in report.comparisons]
    series = [
        ("Jaccard", [c.jaccard_percent for c in report.comparisons], "#2E86AB"),
        ("Cosine", [c.cosine_percent for c in report.comparisons], "#A23B72"),
        ("Combined", [c.combined_percent for c in report.comparisons], "#F18F01"),
    ]

    fig, ax = plt.subplots(figsize=(10, max(3, 1.2 * len(names))))

    height = 0.25
    for offset, (label, values, color) in enumerate(series):
        positions = [i + (offset - 1) * height for i in range(len(names))]
        ax.barh(positions, values, height=height, label=label, color=color)

    for lower, band in PAIR_THRESHOLDS:
        ax.axvline(lower * 100, color="#999", linestyle=":", linewidth=1)
        ax.text(lower * 100, -0.6, band.value, fontsize=8, color="#666")

    ax.set_yticks(range(len(names)))
    ax.set_yticklabels(names)
    ax.invert_yaxis()
    ax.set_xlim(0, 100)
    ax.set_xlabel("Similarity (%)")
    ax.set_title(
        f"{Path(report.target).name}: overall {report.overall_percent:.1f}% "
        f"({report.overall_band.value})"
    )
    ax.legend(loc="lower right")

    for spine in ax.spines.values():
        spine.set_visible(False)
    ax.tick_params(axis="both", length=0)

    plt.tight_layout()
    return fig
