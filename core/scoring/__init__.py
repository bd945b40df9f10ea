#!/usr/bin/env python3
"""
Scoring Module - per-center multi-factor scoring.

Public API:
- ScoreAggregator: Runs the four scorers for one center and combines them
- ScoringWeights / select_weights: Weight sets and severity-based selection
- ScoreBreakdown: Aggregated per-center result

Modules:

- models.py: Input snapshots and per-module detail records
- constants.py: Static lookup tables
- distance.py: Haversine distance, road correction, distance score
- operating_status.py: Operating status state machine
- specialty.py: Staff certification scoring
- program.py: Program matching and diversity fallback
- weights.py: Weight sets
- aggregator.py: ScoreAggregator
"""

from core.scoring.models import ScoreBreakdown
from core.scoring.weights import ScoringWeights, select_weights
from core.scoring.aggregator import ScoreAggregator

__all__ = ['ScoreAggregator', 'ScoringWeights', 'select_weights', 'ScoreBreakdown']
