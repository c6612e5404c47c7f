from bimultimap.configurations import GridConfigurations
from bimultimap.errors import BiMultiMapError, ConcurrentModificationError, ConfigurationError, InvalidCapacityError
from bimultimap.grid import BucketGrid
from bimultimap.hashing import BuiltinHashProvider, HashProvider, RandomStateHashProvider
from bimultimap.map import BiMultiMap, GridStats

__all__ = [
    "BiMultiMap",
    "BiMultiMapError",
    "BucketGrid",
    "BuiltinHashProvider",
    "ConcurrentModificationError",
    "ConfigurationError",
    "GridConfigurations",
    "GridStats",
    "HashProvider",
    "InvalidCapacityError",
    "RandomStateHashProvider",
]
