from typing import List, Optional

import numpy as np

from entity import Direction, DropoffId, FromEngine, Position, Ship, ShipId, ShipyardId
from errors import BoardConflictError


class Structure:
    """Either a shipyard or a dropoff, told apart by the type of its id."""

    def __init__(self, structure_id):
        if not isinstance(structure_id, (ShipyardId, DropoffId)):
            raise TypeError(f'Not a structure id: {structure_id!r}')
        self.id = structure_id

    @property
    def is_shipyard(self):
        return isinstance(self.id, ShipyardId)

    @property
    def is_dropoff(self):
        return isinstance(self.id, DropoffId)

    def __eq__(self, other):
        return isinstance(other, Structure) and self.id == other.id

    def __hash__(self):
        return hash(self.id)

    def __repr__(self):
        return f'{self.__class__.__name__}({self.id!r})'


class Cell:
    def __init__(self, board, x, y):
        self._board = board
        self.position = Position(x, y)
        self.ship: Optional[ShipId] = None
        self.structure: Optional[Structure] = None

    @property
    def halite(self):
        return int(self._board.halite[self.position.y, self.position.x])

    @halite.setter
    def halite(self, value):
        self._board.halite[self.position.y, self.position.x] = value

    def is_occupied(self):
        return self.ship is not None

    def has_structure(self):
        return self.structure is not None

    def is_empty(self):
        return not self.is_occupied() and not self.has_structure()

    def __repr__(self):
        return f'{self.__class__.__name__}({self.position}, halite={self.halite}, ' \
               f'ship={self.ship}, structure={self.structure})'


class Board(FromEngine):
    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        # halite[y, x]
        self.halite = np.zeros(shape=(height, width), dtype=int)
        self.cells: List[List[Cell]] = [[Cell(self, x, y) for x in range(width)] for y in range(height)]

    @classmethod
    def create(cls, reader):
        width = reader.next(int)
        height = reader.next(int)
        board = cls(width, height)
        for y in range(height):
            for x in range(width):
                board.halite[y, x] = reader.next(int)
        return board

    def refresh(self, reader):
        """Applies the engine's list of cells whose halite changed since last turn."""
        for _ in range(reader.next(int)):
            position = Position.create(reader)
            self[position].halite = reader.next(int)

    def normalize(self, position):
        return position.wrap(self.width, self.height)

    def __getitem__(self, position) -> Cell:
        normalized = self.normalize(position)
        return self.cells[normalized.y][normalized.x]

    def __iter__(self):
        for row in self.cells:
            yield from row

    def calculate_distance(self, source, target):
        return (target - source).reduce(self.width, self.height).manhattan

    def total_halite(self):
        return int(np.sum(self.halite))

    def naive_navigate(self, ship):
        """
        Returns the direction of the richest free neighbour of ship, or None if all four neighbours hold a ship.
        Equal halite keeps the N, E, S, W order.
        """
        candidates = [(direction, self[ship.position + direction]) for direction in Direction.all()]
        candidates.sort(key=lambda pair: pair[1].halite, reverse=True)
        for direction, cell in candidates:
            if not cell.is_occupied():
                return direction
        return None

    def clear_ships(self):
        for cell in self:
            cell.ship = None

    def add_ship(self, ship: Ship):
        cell = self[ship.position]
        if cell.ship is not None and cell.ship != ship.id:
            raise BoardConflictError(f'{ship} placed on {cell.position}, already taken by ship {cell.ship}')
        cell.ship = ship.id

    def add_structure(self, position, structure_id):
        cell = self[position]
        structure = Structure(structure_id)
        if cell.structure is not None and cell.structure != structure:
            raise BoardConflictError(f'{structure} placed on {cell.position}, already taken by {cell.structure}')
        cell.structure = structure

    def __repr__(self):
        return f'Board(width={self.width}, height={self.height})'
