"""Chart rendering helpers."""

from __future__ import annotations

from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from debtsummit.models import PayoffStep
from debtsummit.services.reports import build_payoff_chart, subsample_steps


def payoff_chart_png(
    steps: Sequence[PayoffStep],
    *,
    output_path: Path | None = None,
    sample_every: int = 1,
) -> Path:
    """Render the payoff projection to PNG and return its path.

    Without ``output_path`` the image goes to a temporary file.
    """

    fig = build_payoff_chart(subsample_steps(steps, every=sample_every))
    try:
        if output_path is None:
            with NamedTemporaryFile(delete=False, suffix=".png") as tmp:
                path = Path(tmp.name)
        else:
            path = Path(output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(path, bbox_inches="tight", dpi=100)
    finally:
        plt.close(fig)
    return path
