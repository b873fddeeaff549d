"""
Repository helpers for reading the JSON reference data used by the engine
(design-pattern catalog and scoring policies).
"""
from __future__ import annotations

import json
import logging
from dataclasses import fields, replace
from pathlib import Path
from typing import Any, Dict, List

from domain.catalog import Catalog
from domain.engine import PersonaEngine
from domain.policies import ScoringPolicies
from domain.validators import validate_catalog

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class Repository:
    def __init__(self, data_dir: Path | None = None) -> None:
        self.data_dir = data_dir or DATA_DIR

    def load_catalog_data(self) -> List[Dict[str, Any]]:
        fp = self.data_dir / "games.json"
        with fp.open("r", encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, list):
            raise ValueError("Catalog validation failed: games.json must hold a list of games")
        return raw

    def load_catalog(self) -> Catalog:
        catalog = Catalog(validate_catalog(self.load_catalog_data()))
        logger.debug("catalog loaded games=%d from %s", len(catalog), self.data_dir)
        return catalog

    def load_policies(self) -> ScoringPolicies:
        fp = self.data_dir / "policies.json"
        if not fp.exists():
            return ScoringPolicies()
        try:
            raw = json.loads(fp.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable policies file %s: %s", fp, e)
            return ScoringPolicies()
        if not isinstance(raw, dict):
            logger.warning("Ignoring policies file %s: expected an object", fp)
            return ScoringPolicies()
        pol = ScoringPolicies()
        known = {f.name for f in fields(ScoringPolicies)}
        updates: Dict[str, Any] = {}
        for key, value in raw.items():
            if key not in known:
                continue
            default = getattr(pol, key)
            try:
                updates[key] = type(default)(value)
            except (TypeError, ValueError):
                logger.warning("Ignoring policy %s=%r: expected %s", key, value, type(default).__name__)
        return replace(pol, **updates)

    def load_engine(self) -> PersonaEngine:
        return PersonaEngine(catalog=self.load_catalog(), policies=self.load_policies())
