import json
import logging
from typing import Iterable, Optional, Tuple

from pydantic import ValidationError

from dispatch.errors import ConfigurationError
from models.fleet import FleetMember

logger = logging.getLogger(__name__)

DEFAULT_FLEET = (
    {"Name": "Bucephalus", "Color": "Golden", "Gender": "Male"},
    {"Name": "Shadowfax", "Color": "White", "Gender": "Male"},
    {"Name": "Rocinante", "Color": "Yellow", "Gender": "Female"},
)


class FleetRegistry:
    """Immutable, ordered catalog of the unicorns this service can assign."""

    def __init__(self, members: Iterable[FleetMember]):
        self._members: Tuple[FleetMember, ...] = tuple(members)
        if not self._members:
            raise ConfigurationError("Fleet is empty; refusing to serve traffic.")

    def all_members(self) -> Tuple[FleetMember, ...]:
        return self._members

    def __len__(self):
        return len(self._members)

    @classmethod
    def from_dicts(cls, entries) -> "FleetRegistry":
        if not isinstance(entries, (list, tuple)):
            raise ConfigurationError("Fleet definition must be a list of members.")
        try:
            return cls(FleetMember(**entry) for entry in entries)
        except (TypeError, ValidationError) as e:
            raise ConfigurationError(f"Invalid fleet member: {e}") from e


def load_fleet(fleet_file: Optional[str] = None) -> FleetRegistry:
    """
    Load the fleet once at startup: from a JSON file when given,
    otherwise the built-in three unicorns.
    """
    if not fleet_file:
        return FleetRegistry.from_dicts(DEFAULT_FLEET)
    try:
        with open(fleet_file, "r", encoding="utf-8") as f:
            entries = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not read fleet file {fleet_file}: {e}") from e
    registry = FleetRegistry.from_dicts(entries)
    logger.info("Loaded %d fleet members from %s", len(registry), fleet_file)
    return registry
