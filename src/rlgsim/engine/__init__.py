from .scheduler import Event, EventScheduler, next_turn_time
from .simulation import Outcome, Simulation

__all__ = ["Event", "EventScheduler", "Outcome", "Simulation", "next_turn_time"]
