import random
from typing import Optional

from fleet.fleet import FleetRegistry
from models.fleet import FleetMember
from models.ride import Coordinates

class AssignmentSelector:
    """Uniform-random assignment. The pickup location is accepted but not used yet."""

    def __init__(self, registry: FleetRegistry, rng: Optional[random.Random] = None):
        self.registry = registry
        self.rng = rng or random.Random()

    def select_for(self, pickup_location: Coordinates) -> FleetMember:
        return self.rng.choice(self.registry.all_members())
