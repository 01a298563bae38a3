"""Pre-calculate reference SD curves into JSON files for static front-ends.

Run manually:

    python -m scripts.precalculate_curves [--out outputs/curves] [--age-step 0.1]

Writes one file per (sex, metric), e.g. outputs/curves/height_male_curves.json:
{"reference_version": ..., "curves": {"+2SD": [{"age": 0.0, "value": 52.6}, ...]}}
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from app.core.config import load_config, reference_dir, sd_levels
from src.models.growth.config import METRICS, PROJECT_ROOT, SEXES
from src.models.growth.curves import curve_style, sample_curves
from src.models.growth.reference import ReferenceTableStore, load_reference_store


logger = logging.getLogger(__name__)


def export_curves(store: ReferenceTableStore, cfg: dict, out_dir: Path, age_step: float) -> list[Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for metric in METRICS:
        for sex in SEXES:
            curves = sample_curves(sex, metric, sd_levels(cfg, metric), age_step=age_step, store=store)
            payload = {
                "reference_version": store.version,
                "sex": sex,
                "metric": metric,
                "age_step": age_step,
                "curves": {
                    c.label: {
                        "style": curve_style(metric, c.sd_level),
                        "points": [{"age": p.age, "value": round(p.value, 3)} for p in c.points],
                    }
                    for c in curves.values()
                },
            }
            path = out_dir / f"{metric}_{sex}_curves.json"
            path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
            logger.info("Wrote %s (%d curves)", path, len(curves))
            written.append(path)
    return written


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    ap = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    ap.add_argument("--config", default=None)
    ap.add_argument("--out", default=str(PROJECT_ROOT / "outputs" / "curves"))
    ap.add_argument("--age-step", type=float, default=None)
    args = ap.parse_args()

    cfg = load_config(args.config)
    store = load_reference_store(
        reference_dir(cfg),
        weight_model=cfg["growth"]["weight_model"],
        version=cfg["growth"].get("reference_version", ""),
    )
    step = args.age_step or float(cfg["growth"]["age_step"])
    export_curves(store, cfg, Path(args.out), step)


if __name__ == "__main__":
    main()
