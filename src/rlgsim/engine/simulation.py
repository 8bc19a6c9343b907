from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from ..actors.characters import (
    Behavior,
    Character,
    Monster,
    PlayerCharacter,
    make_player,
    spawn_monster,
)
from ..actors.turns import take_turn
from ..config import SimConfig
from ..dungeon.generation import Level, LevelGenerator
from ..dungeon.pathfinding import PathFields
from ..dungeon.terrain import TerrainModel
from ..interfaces import InputProvider, Renderer
from ..persistence.codec import MonsterRecord, SavedState
from ..rng import RandomSource
from .scheduler import EventScheduler, next_turn_time

logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    """Why a level (or the whole run) stopped."""

    PC_DIED = "pc_died"
    QUIT = "quit"
    VICTORY = "victory"
    LEVEL_CHANGE = "level_change"
    QUEUE_EMPTY = "queue_empty"

    @property
    def terminal(self) -> bool:
        return self is not Outcome.LEVEL_CHANGE


class Simulation:
    """All mutable state of a run: level, roster, distance fields and flags.

    Actors mutate it in place one at a time while the scheduler loop in
    `run_level` drives them. The roster keeps dead characters (alive=False)
    until a new level replaces it.
    """

    def __init__(self, config: SimConfig, rng: RandomSource, level: Level, pc: PlayerCharacter) -> None:
        self.config = config
        self.rng = rng
        self.level = level
        self._pc = pc
        self.roster: List[Character] = [pc]
        self.fields = PathFields.empty(level.width, level.height)
        self.level_changed = False
        self.quit_requested = False
        self.time = 0
        self.depth = 1
        self.message = ""

    # ---------- construction ----------

    @classmethod
    def new(
        cls,
        config: Optional[SimConfig] = None,
        rng: Optional[RandomSource] = None,
        num_monsters: Optional[int] = None,
    ) -> "Simulation":
        cfg = config or SimConfig()
        rng = rng or RandomSource(cfg.seed)
        level = LevelGenerator(cfg).generate(rng)
        sim = cls(cfg, rng, level, make_player(*level.pc_start(), cfg))
        sim._populate(cfg.num_monsters if num_monsters is None else num_monsters)
        return sim

    @classmethod
    def from_saved(
        cls,
        state: SavedState,
        config: Optional[SimConfig] = None,
        rng: Optional[RandomSource] = None,
    ) -> "Simulation":
        """Rebuild a run from a decoded save: stored monsters, fresh PC, blank fog."""
        cfg = config or SimConfig()
        rng = rng or RandomSource(cfg.seed)
        terrain = TerrainModel(state.width, state.height)
        terrain.hardness = [list(row) for row in state.hardness]
        level = Level(
            terrain=terrain,
            rooms=list(state.rooms),
            up_stairs=state.up_stairs,
            down_stairs=state.down_stairs,
        )
        level.rederive()
        sim = cls(cfg, rng, level, make_player(*state.pc, cfg))
        for rec in state.monsters:
            sim.roster.append(
                Monster(x=rec.x, y=rec.y, speed=rec.speed, behavior=Behavior(rec.flags), hp=rec.hp)
            )
        sim.refresh_fields()
        logger.info("Resumed level with %d monsters, PC at %s", sim.live_monster_count(), state.pc)
        return sim

    def new_level(self, num_monsters: Optional[int] = None) -> None:
        """Replace terrain and roster wholesale with a freshly generated level."""
        self.level = LevelGenerator(self.config).generate(self.rng)
        self._pc = make_player(*self.level.pc_start(), self.config)
        self.roster = [self._pc]
        self.level_changed = False
        self.depth += 1
        self._populate(self.config.num_monsters if num_monsters is None else num_monsters)

    def _populate(self, num_monsters: int) -> None:
        taken = {self._pc.pos}
        for _ in range(num_monsters):
            monster = spawn_monster(self.level.terrain, self.rng, self.config, avoid=taken)
            if monster is None:
                break
            taken.add(monster.pos)
            self.roster.append(monster)
        self.refresh_fields()
        logger.info(
            "Level %d ready: %d rooms, %d monsters, PC at %s",
            self.depth,
            len(self.level.rooms),
            self.live_monster_count(),
            self._pc.pos,
        )

    def snapshot(self) -> SavedState:
        """The persisted view of this run. Only living monsters are kept."""
        return SavedState(
            pc=self._pc.pos,
            hardness=[row[:] for row in self.terrain.hardness],
            rooms=list(self.level.rooms),
            up_stairs=self.level.up_stairs,
            down_stairs=self.level.down_stairs,
            monsters=[
                MonsterRecord(m.x, m.y, m.speed, m.hp, int(m.behavior))
                for m in self.monsters
                if m.alive
            ],
        )

    # ---------- queries ----------

    @property
    def terrain(self) -> TerrainModel:
        return self.level.terrain

    @property
    def pc(self) -> PlayerCharacter:
        return self._pc

    @property
    def pc_alive(self) -> bool:
        return self._pc.alive

    @property
    def monsters(self) -> List[Monster]:
        return [c for c in self.roster if isinstance(c, Monster)]

    def live_monster_count(self) -> int:
        return sum(1 for m in self.monsters if m.alive)

    def live_at(self, x: int, y: int) -> List[Character]:
        return [c for c in self.roster if c.alive and c.x == x and c.y == y]

    def character_at(self, x: int, y: int) -> Optional[Character]:
        """The live character drawn at a cell; the PC wins over monsters."""
        found = self.live_at(x, y)
        for c in found:
            if c is self._pc:
                return c
        return found[0] if found else None

    # ---------- mutation ----------

    def kill(self, character: Character) -> None:
        character.kill()
        logger.debug("%r died", character)

    def refresh_fields(self) -> None:
        self.fields.recompute(self.terrain, self._pc.pos)

    # ---------- turn loop ----------

    def run_level(self, input_provider: InputProvider, renderer: Optional[Renderer] = None) -> Outcome:
        """Drive actors through the scheduler until the level ends."""
        self.level_changed = False
        self.refresh_fields()
        scheduler = EventScheduler()
        for actor in self.roster:
            if actor.alive:
                scheduler.push(0, actor)

        while (
            not scheduler.is_empty()
            and self.pc_alive
            and self.live_monster_count() > 0
            and not self.level_changed
        ):
            event = scheduler.pop()
            actor = event.actor
            if not actor.alive:
                continue
            self.time = event.time
            before = self._pc.pos
            take_turn(actor, self, input_provider, renderer)
            if self._pc.pos != before:
                self.refresh_fields()
            if not self.pc_alive:
                break
            if actor.alive and not self.level_changed:
                scheduler.push(next_turn_time(event.time, actor.speed), actor)

        outcome = self._outcome()
        logger.info("Level %d ended at time %d: %s", self.depth, self.time, outcome.value)
        return outcome

    def _outcome(self) -> Outcome:
        if self.quit_requested:
            return Outcome.QUIT
        if not self.pc_alive:
            return Outcome.PC_DIED
        if self.level_changed:
            return Outcome.LEVEL_CHANGE
        if self.live_monster_count() == 0:
            return Outcome.VICTORY
        return Outcome.QUEUE_EMPTY

    def play(
        self,
        input_provider: InputProvider,
        renderer: Optional[Renderer] = None,
        num_monsters: Optional[int] = None,
    ) -> Outcome:
        """Run levels until a terminal outcome, regenerating on every stair use."""
        while True:
            outcome = self.run_level(input_provider, renderer)
            if outcome.terminal:
                return outcome
            self.new_level(num_monsters)


__all__ = ["Outcome", "Simulation"]
