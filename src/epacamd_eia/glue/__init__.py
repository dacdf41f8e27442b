"""Tools for reconciling EPA CAMD units with EIA-860 generators.

EPA's Clean Air Markets Division and EIA both report on the same power plants, but
they describe the equipment inside each plant using their own, loosely coordinated,
identifiers. The modules in this subpackage correct the plant IDs that differ between
the two, then match up the units and generators within each plant using a cascade of
progressively looser comparisons of their free-text generator IDs.
"""

from . import cascade, crosswalk, id_rules, plant_ids  # noqa: F401
