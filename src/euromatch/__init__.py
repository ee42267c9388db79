"""euromatch — EUROMOD donor income aggregation and nearest-match engine.

Donor households observed in EUROMOD output are aggregated once per run and
indexed by labour-supply choice and household characteristics, so that a
simulated household can borrow a donor's disposable income under any
hypothetical labour-supply combination.
"""

__version__ = "0.1.0"
