from enum import Enum


class FromEngine:
    """
    Something the engine describes in its token stream.

    create() builds a fresh instance the first time the engine mentions it, refresh() updates an existing
    instance in place on a later turn. Both consume exactly the tokens that describe the instance.
    """
    __slots__ = ()

    @classmethod
    def create(cls, reader):
        raise NotImplementedError

    def refresh(self, reader):
        pass


def normalize(v, d):
    """Returns v wrapped into [0, d)."""
    return v % d


def invert(v, d):
    """
    Returns the value congruent to v modulo d on the other side of zero, i.e. the distance "the other way around".
    Zero if v is a multiple of d.
    """
    r = v % d
    if r == 0:
        return 0
    if v > 0:
        return r - d
    return r


def _toward_zero(v, d):
    # v modulo d, keeping the sign of v
    if v < 0:
        return -(-v % d)
    return v % d


class Offset:
    __slots__ = ('dx', 'dy')

    def __init__(self, dx, dy):
        self.dx = int(dx)
        self.dy = int(dy)

    def __neg__(self):
        return Offset(-self.dx, -self.dy)

    def __abs__(self):
        return Offset(abs(self.dx), abs(self.dy))

    @property
    def manhattan(self):
        return abs(self.dx) + abs(self.dy)

    def reduce(self, width, height):
        """
        Returns the shortest offset equivalent to this one on a width by height torus. Candidates are checked in the
        order direct, x wrapped, y wrapped, both wrapped and the first one of minimum length wins.
        """
        dx = _toward_zero(self.dx, width)
        dy = _toward_zero(self.dy, height)
        candidates = (
            Offset(dx, dy),
            Offset(invert(dx, width), dy),
            Offset(dx, invert(dy, height)),
            Offset(invert(dx, width), invert(dy, height)),
        )
        return min(candidates, key=lambda o: o.manhattan)

    def __eq__(self, other):
        return isinstance(other, Offset) and self.dx == other.dx and self.dy == other.dy

    def __hash__(self):
        return hash((Offset, self.dx, self.dy))

    def __repr__(self):
        return f'{self.__class__.__name__}({self.dx}, {self.dy})'


class Direction(Enum):
    NORTH = 'n'
    EAST = 'e'
    SOUTH = 's'
    WEST = 'w'

    @property
    def offset(self):
        return _DIRECTION_OFFSETS[self]

    @staticmethod
    def all():
        return [Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST]

    @staticmethod
    def from_offset(offset):
        for direction, unit in _DIRECTION_OFFSETS.items():
            if unit == offset:
                return direction
        raise ValueError(f'Not a unit offset: {offset}')

    def invert(self):
        return Direction.from_offset(-self.offset)


_DIRECTION_OFFSETS = {
    Direction.NORTH: Offset(0, -1),
    Direction.EAST: Offset(1, 0),
    Direction.SOUTH: Offset(0, 1),
    Direction.WEST: Offset(-1, 0),
}


class Position(FromEngine):
    __slots__ = ('x', 'y')

    def __init__(self, x, y):
        self.x = int(x)
        self.y = int(y)

    @classmethod
    def create(cls, reader):
        x = reader.next(int)
        y = reader.next(int)
        return cls(x, y)

    def wrap(self, width, height):
        return Position(normalize(self.x, width), normalize(self.y, height))

    def get_surrounding(self):
        return [self + direction for direction in Direction.all()]

    def __add__(self, other):
        if isinstance(other, Direction):
            other = other.offset
        if not isinstance(other, Offset):
            return NotImplemented
        return Position(self.x + other.dx, self.y + other.dy)

    def __sub__(self, other):
        if not isinstance(other, Position):
            return NotImplemented
        return Offset(self.x - other.x, self.y - other.y)

    def __eq__(self, other):
        return isinstance(other, Position) and self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((Position, self.x, self.y))

    def __repr__(self):
        return f'{self.__class__.__name__}({self.x}, {self.y})'


class _Id(FromEngine):
    """An integer handle that only compares equal to handles of the same kind."""
    __slots__ = ('value',)

    def __init__(self, value):
        self.value = int(value)

    @classmethod
    def create(cls, reader):
        return cls(reader.next(int))

    def __int__(self):
        return self.value

    def __eq__(self, other):
        return type(other) is type(self) and other.value == self.value

    def __lt__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.value < other.value

    def __hash__(self):
        return hash((type(self).__name__, self.value))

    def __str__(self):
        return str(self.value)

    def __repr__(self):
        return f'{self.__class__.__name__}({self.value})'


class PlayerId(_Id):
    __slots__ = ()


class ShipId(_Id):
    __slots__ = ()


class DropoffId(_Id):
    __slots__ = ()


class ShipyardId(_Id):
    __slots__ = ()


class Entity(FromEngine):
    def __init__(self, owner_id: PlayerId, id_, position: Position):
        self.owner_id = owner_id
        self.id = id_
        self.position = position

    def __repr__(self):
        return f'{self.__class__.__name__}(id={self.id}, owner_id={self.owner_id}, {self.position})'

    def __eq__(self, other):
        return type(other) is type(self) and self.id == other.id

    def __hash__(self):
        return hash(self.id)


class Shipyard(Entity):
    pass


class Dropoff(Entity):
    @classmethod
    def create(cls, reader, dropoff_id=None, owner_id=None):
        return cls(owner_id, dropoff_id, Position.create(reader))

    def refresh(self, reader):
        # Dropoffs never move, but the engine repeats their position every turn.
        self.position = Position.create(reader)


class Ship(Entity):
    def __init__(self, owner_id, id_, position, halite=0):
        super().__init__(owner_id, id_, position)
        self.halite = halite
        self.data = {}  # free-form per-ship bookkeeping, kept across turns

    @classmethod
    def create(cls, reader, ship_id=None, owner_id=None):
        position = Position.create(reader)
        halite = reader.next(int)
        return cls(owner_id, ship_id, position, halite)

    def refresh(self, reader):
        self.position = Position.create(reader)
        self.halite = reader.next(int)

    def is_full(self, constants):
        return self.halite >= constants.max_halite

    def __repr__(self):
        return f'{self.__class__.__name__}(id={self.id}, owner_id={self.owner_id}, {self.position}, Halite={self.halite})'


class Player(FromEngine):
    def __init__(self, player_id: PlayerId, shipyard: Shipyard):
        self.id = player_id
        self.shipyard = shipyard
        self.ship_ids = []
        self.dropoff_ids = []
        self.halite = 0

    @classmethod
    def create(cls, reader):
        player_id = PlayerId.create(reader)
        position = Position.create(reader)
        # Shipyard ids are not sent; each player owns exactly one, numbered like the player.
        shipyard = Shipyard(player_id, ShipyardId(player_id.value), position)
        return cls(player_id, shipyard)

    def __repr__(self):
        return f'{self.__class__.__name__}(id={self.id}, ships={len(self.ship_ids)}, ' \
               f'dropoffs={len(self.dropoff_ids)}, halite={self.halite})'


class Command:
    def __init__(self, target_id):
        self.target_id = target_id

    def __eq__(self, other):
        return type(other) is type(self) and vars(other) == vars(self)

    def __repr__(self):
        return f'{self.__class__.__name__}(target_id={self.target_id})'


class MoveCommand(Command):
    def __init__(self, target_id: ShipId, direction: Direction):
        super().__init__(target_id)
        self.direction = direction

    @property
    def direction_vector(self):
        return self.direction.offset

    def __repr__(self):
        return f'{self.__class__.__name__}(target_id={self.target_id}, direction={self.direction.name})'


class CollectCommand(Command):
    pass


class SpawnShipCommand(Command):
    def __init__(self):
        super().__init__(None)

    def __repr__(self):
        return f'{self.__class__.__name__}()'


class ConstructDropoffCommand(Command):
    pass
