from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from pm2_recover.domain.models import RecoveryPlan


def render_plans(plans: Sequence[RecoveryPlan]) -> str:
    """Join plans with a blank line between them; empty input renders as an empty string."""
    if not plans:
        return ""
    return "\n\n".join(plan.render() for plan in plans) + "\n"


def write_plans(
    plans: Sequence[RecoveryPlan],
    output_path: Path | None = None,
    stream: TextIO | None = None,
) -> None:
    text = render_plans(plans)
    if output_path is not None:
        path = output_path.expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return
    target = stream or sys.stdout
    target.write(text)
    target.flush()
