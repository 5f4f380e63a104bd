"""Deviatoric stress ``q`` on the yield envelope as a function of mean stress ``p``.

Mohr-Coulomb has two bounding meridians, triaxial compression (σ2 = σ3) and
triaxial extension (σ1 = σ2); Drucker-Prager has a single linear meridian.

The Mohr-Coulomb functions return sentinels rather than raising:

* ``math.inf`` when the denominator ``3 ∓ sin φ`` vanishes,
* ``math.nan`` when the formula gives a negative ``q``.

Use :func:`is_valid_q` before placing a value into any coordinate.
"""

from __future__ import annotations

import math

# friction angles at or below this (radians) are treated as φ = 0
PHI_ZERO_TOL = 1e-3
# cohesion at or below this is treated as c = 0 when locating the apex
COHESION_ZERO_TOL = 1e-3
SLOPE_ZERO_TOL = 1e-6
DENOMINATOR_TOL = 1e-6

INVALID_Q = math.nan


def is_valid_q(q: float) -> bool:
    """Return ``True`` when ``q`` is a usable deviatoric stress (finite, ``>= 0``)."""

    return math.isfinite(q) and q >= 0.0


def _mc_q(p: float, c: float, phi: float, denominator: float) -> float:
    if abs(denominator) < DENOMINATOR_TOL:
        return math.inf
    q = (6.0 * p * math.sin(phi) + 6.0 * c * math.cos(phi)) / denominator
    if q < 0.0:
        return INVALID_Q
    return q


def mc_q_compression(p: float, c: float, phi: float) -> float:
    """Triaxial-compression meridian ``q = (6 p sinφ + 6 c cosφ) / (3 - sinφ)``."""

    return _mc_q(p, c, phi, 3.0 - math.sin(phi))


def mc_q_extension(p: float, c: float, phi: float) -> float:
    """Triaxial-extension meridian ``q = (6 p sinφ + 6 c cosφ) / (3 + sinφ)``."""

    return _mc_q(p, c, phi, 3.0 + math.sin(phi))


def mc_has_apex(c: float, phi: float) -> bool:
    return phi > PHI_ZERO_TOL and c > COHESION_ZERO_TOL


def mc_apex_pressure(c: float, phi: float) -> float:
    """Mean stress of the pyramid apex on the hydrostatic axis, ``c / tan φ``.

    Zero when there is no cohesion or no friction; never negative.
    """

    if not mc_has_apex(c, phi):
        return 0.0
    return max(0.0, c / math.tan(phi))


def dp_q(p: float, m: float, kd: float) -> float:
    """Drucker-Prager meridian ``q = max(0, m p + k_d)``."""

    return max(0.0, m * p + kd)


def dp_start_pressure(m: float, kd: float) -> float:
    """Lowest mean stress with a non-degenerate cone, ``-k_d / m`` for a tension cut."""

    if m > SLOPE_ZERO_TOL and kd < 0.0:
        return max(0.0, -kd / m)
    return 0.0


__all__ = [
    'PHI_ZERO_TOL',
    'COHESION_ZERO_TOL',
    'SLOPE_ZERO_TOL',
    'INVALID_Q',
    'is_valid_q',
    'mc_q_compression',
    'mc_q_extension',
    'mc_has_apex',
    'mc_apex_pressure',
    'dp_q',
    'dp_start_pressure',
]
