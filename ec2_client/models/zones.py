"""Static table of regions and availability zones."""

from typing import Dict, List, Tuple


AVAILABILITY_ZONES: Dict[str, Tuple[str, ...]] = {
    'us-east': ('us-east-1a', 'us-east-1b', 'us-east-1c', 'us-east-1d'),
    'us-west': ('us-west-1a', 'us-west-1b'),
    'eu-west': ('eu-west-1a', 'eu-west-1b'),
}


class Zones:
    """Known regions and the availability zones within them."""

    def __init__(self, availability_zones: Dict[str, Tuple[str, ...]] = None):
        self._zones = dict(AVAILABILITY_ZONES if availability_zones is None else availability_zones)

    def regions(self) -> List[str]:
        return list(self._zones)

    def zones(self) -> List[str]:
        """All zones across every region, in table order."""
        return [zone for region_zones in self._zones.values() for zone in region_zones]

    def zones_in(self, region: str) -> List[str]:
        return list(self._zones.get(region, ()))

    def is_valid(self, zone: str) -> bool:
        return zone in self.zones()
