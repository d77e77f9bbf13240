"""Interference-aware group and population effect estimators.

Population quantities average group-level Hajek means over the groups that
carry a strategy, which makes ``indirect + direct(focal) == total`` hold
exactly for every dataset.
"""

from typing import Dict, Iterable

import numpy as np
import pandas as pd

from ..exceptions import DecompositionError
from ..simulator.core.utils import hajek_mean


def group_arm_means(df: pd.DataFrame) -> pd.DataFrame:
    """Per-group arm means and the group direct effect.

    Returns
    -------
    pd.DataFrame
        Indexed by group_id with columns 'strategy', 'n_treated',
        'mean_treated', 'mean_untreated', 'mean_outcome' and 'direct'.
        An arm without units yields NaN.
    """
    rows = []
    for group_id, group in df.groupby('group_id', sort=True):
        a = group['treatment'].values
        y = group['outcome'].values
        mean_treated = hajek_mean(y, a)
        mean_untreated = hajek_mean(y, 1 - a)
        rows.append({
            'group_id': group_id,
            'strategy': group['strategy'].iloc[0],
            'n_treated': int(a.sum()),
            'mean_treated': mean_treated,
            'mean_untreated': mean_untreated,
            'mean_outcome': float(y.mean()),
            'direct': mean_treated - mean_untreated
        })
    return pd.DataFrame(rows).set_index('group_id')


def population_effects(
    groups: pd.DataFrame,
    focal: str,
    reference: str
) -> Dict[str, float]:
    """Population direct, indirect, total and overall effects.

    Parameters
    ----------
    groups : pd.DataFrame
        Output of ``group_arm_means``.
    focal, reference : str
        Strategy labels; contrasts are focal minus reference.

    Returns
    -------
    Dict[str, float]
        'direct_<label>' for every strategy present, plus 'indirect',
        'total' and 'overall'.
    """
    # numpy means so that an empty arm (NaN) propagates instead of being skipped
    by_strategy = pd.DataFrame({
        label: {col: np.mean(group[col].values)
                for col in ('mean_treated', 'mean_untreated', 'mean_outcome', 'direct')}
        for label, group in groups.groupby('strategy', sort=True)
    }).T

    for label in (focal, reference):
        if label not in by_strategy.index:
            raise ValueError(f"No group carries strategy '{label}'")

    effects = {f'direct_{label}': float(by_strategy.loc[label, 'direct'])
               for label in by_strategy.index}

    f, r = by_strategy.loc[focal], by_strategy.loc[reference]
    effects['indirect'] = float(f['mean_untreated'] - r['mean_untreated'])
    effects['total'] = float(f['mean_treated'] - r['mean_untreated'])
    effects['overall'] = float(f['mean_outcome'] - r['mean_outcome'])
    return effects


def check_decomposition(
    effects: Dict[str, float],
    focal: str,
    tolerance: float = 0.01
) -> None:
    """Raise DecompositionError unless ``indirect + direct(focal) ~= total``."""
    direct = effects[f'direct_{focal}']
    lhs = effects['indirect'] + direct
    rhs = effects['total']

    if not (np.isfinite(lhs) and np.isfinite(rhs)):
        raise DecompositionError(
            f"Non-finite decomposition terms (indirect={effects['indirect']}, "
            f"direct_{focal}={direct}, total={rhs}); a group has an empty treatment arm"
        )
    if abs(lhs - rhs) > tolerance:
        raise DecompositionError(
            f"indirect + direct_{focal} = {lhs:.6f} differs from total = {rhs:.6f} "
            f"by more than {tolerance}"
        )


def group_direct_effects(groups: pd.DataFrame, group_ids: Iterable[int]) -> Dict[str, float]:
    """Group direct effects keyed 'group_direct_<id>'."""
    return {f'group_direct_{g}': float(groups.loc[g, 'direct']) for g in group_ids}
