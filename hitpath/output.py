"""Persist simulation artefacts."""
from __future__ import annotations

import csv
import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .simulate import SimulationResult

_UNSAFE_FILENAME_CHARS = re.compile(r"[\\/\x00]")


@dataclass(slots=True)
class OutputBundle:
    summary_path: Path
    trajectories_dir: Path
    trajectory_paths: list[Path]


class OutputWriter:
    def __init__(self, out_dir: Path):
        self.out_dir = Path(out_dir)
        self.summary_path = self.out_dir / "summary.csv"
        self.trajectories_dir = self.out_dir / "trajectories"

    def write(self, results: Iterable[SimulationResult]) -> OutputBundle:
        self.out_dir.mkdir(parents=True, exist_ok=True)
        self.trajectories_dir.mkdir(parents=True, exist_ok=True)
        trajectory_paths: list[Path] = []
        used_stems: set[str] = set()
        with self.summary_path.open("w", newline="", encoding="utf-8") as csvfile:
            writer = csv.writer(csvfile)
            writer.writerow(
                [
                    "hit_id",
                    "model",
                    "launch_speed",
                    "launch_angle",
                    "spray_angle",
                    "spin_rate",
                    "hit_distance",
                    "points",
                    "apex",
                    "landing_x",
                    "landing_z",
                    "landing_distance",
                    "flight_time",
                    "distance_error",
                    "trajectory",
                ]
            )
            for index, result in enumerate(results):
                hit = result.hit
                trajectory = result.trajectory
                hit_id = hit.hit_id or f"hit-{index + 1:04d}"
                stem = _unique_stem(hit_id, index, used_stems)
                traj_path = self.trajectories_dir / f"{stem}.json"
                traj_path.write_text(json.dumps(trajectory.to_json(), ensure_ascii=False, indent=2))
                trajectory_paths.append(traj_path)
                writer.writerow(
                    [
                        hit_id,
                        result.model.value,
                        round(hit.launch_speed, 4),
                        round(hit.launch_angle, 4),
                        round(hit.spray_angle, 4),
                        round(hit.spin_rate, 4) if hit.spin_rate else "",
                        round(hit.hit_distance, 4) if hit.hit_distance else "",
                        len(trajectory.points),
                        round(trajectory.apex, 4),
                        round(trajectory.landing.x, 4),
                        round(trajectory.landing.z, 4),
                        round(trajectory.landing_distance, 4),
                        round(trajectory.flight_time, 4) if trajectory.flight_time is not None else "",
                        round(result.distance_error, 4) if result.distance_error is not None else "",
                        str(Path("trajectories") / traj_path.name),
                    ]
                )
        return OutputBundle(
            summary_path=self.summary_path,
            trajectories_dir=self.trajectories_dir,
            trajectory_paths=trajectory_paths,
        )


def _unique_stem(hit_id: str, index: int, used: set[str]) -> str:
    """File stem for a hit: path separators replaced, repeats suffixed with the row number."""

    base = _UNSAFE_FILENAME_CHARS.sub("_", hit_id)
    stem = base
    suffix = 1
    while stem in used:
        stem = f"{base}-{index + 1}" if suffix == 1 else f"{base}-{index + 1}-{suffix}"
        suffix += 1
    used.add(stem)
    return stem
