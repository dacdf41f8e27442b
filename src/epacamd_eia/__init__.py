"""Link EPA CAMD emissions units to EIA-860 generators."""

from importlib.metadata import PackageNotFoundError, version

from . import (  # noqa: F401
    cli,
    constants,
    etl,
    extract,
    glue,
    helpers,
    load,
    logging_helpers,
    resources,
    settings,
    validate,
)

__author__ = "Catalyst Cooperative"
__contact__ = "pudl@catalyst.coop"
__maintainer__ = "Catalyst Cooperative"
__license__ = "MIT License"
__maintainer_email__ = "pudl@catalyst.coop"
try:
    __version__ = version("catalystcoop.epacamd_eia")
except PackageNotFoundError:
    __version__ = "unknown"
__docformat__ = "restructuredtext en"
__description__ = "A crosswalk between EPA CAMD emissions units and EIA-860 generators."
__projecturl__ = "https://github.com/catalyst-cooperative/epacamd-eia-crosswalk/"
