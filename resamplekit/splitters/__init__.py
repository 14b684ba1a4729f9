"""
Resampling strategy generators.

This module provides:
- vfold_cv / loo_cv: V-fold (repeated, stratified) and leave-one-out CV
- bootstraps: Bootstrap samples with out-of-bag assessment sets
- mc_cv / initial_split: Monte-Carlo CV and a single train/test split
- rolling_origin: Time-ordered rolling origin slices
- build_resamples: Run any of the above from a config
"""

from resamplekit.splitters.bootstrap import bootstrap_partitions, bootstraps
from resamplekit.splitters.factory import build_resamples, config_from_dict
from resamplekit.splitters.labels import names0
from resamplekit.splitters.mc import initial_split, mc_cv, mc_partitions
from resamplekit.splitters.rolling_origin import rolling_origin, rolling_origin_partitions
from resamplekit.splitters.strata import apply_per_stratum, strata_groups
from resamplekit.splitters.vfold import loo_cv, vfold_cv, vfold_partitions

__all__ = [
    "vfold_cv",
    "vfold_partitions",
    "loo_cv",
    "bootstraps",
    "bootstrap_partitions",
    "mc_cv",
    "mc_partitions",
    "initial_split",
    "rolling_origin",
    "rolling_origin_partitions",
    "strata_groups",
    "apply_per_stratum",
    "names0",
    "build_resamples",
    "config_from_dict",
]
