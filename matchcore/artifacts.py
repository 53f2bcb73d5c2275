"""
Artifact management for batch scoring runs.

Layout under the output directory:
    scores/       pairwise score tables (CSV)
    reports/      evaluation reports (JSON) and top-match listings
    configs/      config snapshots (YAML/JSON)
    metadata.json run metadata
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, List

import pandas as pd
import yaml

logger = logging.getLogger(__name__)

ARTIFACT_SUBDIRS = ("scores", "reports", "configs")


class ArtifactManager:
    """
    Writes run outputs to a structured directory.

    Attributes:
        output_dir: Root directory for all artifacts
    """

    def __init__(self, output_dir: str):
        self.output_dir = Path(output_dir)
        for subdir in ARTIFACT_SUBDIRS:
            (self.output_dir / subdir).mkdir(parents=True, exist_ok=True)
        logger.info(f"Artifacts will be written to {self.output_dir}")

    def save_scores(self, scores_df: pd.DataFrame, name: str = "pair_scores") -> Path:
        """Save a pairwise score table as CSV."""
        path = self.output_dir / "scores" / f"{name}.csv"
        scores_df.to_csv(path, index=False)
        logger.info(f"Saved {len(scores_df)} scores to {path}")
        return path

    def save_evaluation_report(self, report, name: str = "batch") -> Path:
        """Save an EvaluationReport as JSON."""
        path = self.output_dir / "reports" / f"{name}_evaluation.json"
        report.save(str(path))
        return path

    def save_json(self, data: Dict[str, Any], subdir: str, name: str) -> Path:
        """Save an arbitrary JSON document under a subdirectory."""
        path = self.output_dir / subdir / f"{name}.json"
        with open(path, "w") as f:
            json.dump(data, f, indent=2, default=str)
        logger.info(f"Saved {name} to {path}")
        return path

    def save_metadata(self, metadata: Dict[str, Any]) -> Path:
        """Save run metadata."""
        path = self.output_dir / "metadata.json"
        with open(path, "w") as f:
            json.dump(metadata, f, indent=2, default=str)
        logger.info(f"Saved metadata to {path}")
        return path

    def save_yaml_config(self, config: Dict[str, Any], name: str = "config_used") -> Path:
        """Save the configuration used for the run."""
        path = self.output_dir / "configs" / f"{name}.yaml"
        with open(path, "w") as f:
            yaml.safe_dump(config, f, default_flow_style=False, sort_keys=False)
        logger.info(f"Saved config snapshot to {path}")
        return path

    def list_artifacts(self) -> Dict[str, List[str]]:
        """List saved files by subdirectory ("." for top-level files)."""
        artifacts: Dict[str, List[str]] = {}
        top_level = sorted(p.name for p in self.output_dir.iterdir() if p.is_file())
        if top_level:
            artifacts["."] = top_level
        for subdir in ARTIFACT_SUBDIRS:
            files = sorted(p.name for p in (self.output_dir / subdir).iterdir() if p.is_file())
            if files:
                artifacts[subdir] = files
        return artifacts
