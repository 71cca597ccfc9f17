import logging
from typing import Dict, List

from board import Board
from constants import Constants
from engine import Engine
from entity import (CollectCommand, Command, ConstructDropoffCommand, Dropoff, DropoffId, FromEngine, MoveCommand,
                    Player, PlayerId, Ship, ShipId, SpawnShipCommand)
from errors import ConfigurationMisuseError, ProtocolDesyncError, UnknownEntityError


class Game(FromEngine):
    """
    Client-side mirror of the engine's game state.

    Built once by start() from the engine's opening dump, then reconciled every turn by update(). Ships and dropoffs
    that persist between turns keep their Python objects, so anything a policy hangs on them survives.
    """

    def __init__(self, my_id: PlayerId, players: Dict[PlayerId, Player], board: Board, engine: Engine = None):
        self.my_id = my_id
        self.players = players
        self.board = board
        self.ships: Dict[ShipId, Ship] = {}
        self.dropoffs: Dict[DropoffId, Dropoff] = {}
        self.commands: List[Command] = []
        self.turn = 0
        self.engine = engine
        self._constants = None
        self._stamped_dropoffs = set()

    @classmethod
    def start(cls, engine=None):
        """Reads the constants and the opening dump and returns the initial game."""
        if engine is None:
            engine = Engine()
        with engine.reader() as reader:
            constants = reader.recv(Constants)
            game = reader.recv(cls)
        game.engine = engine
        game.constants = constants
        return game

    @classmethod
    def create(cls, reader):
        player_count = reader.next(int)
        my_id = PlayerId.create(reader)
        players = {}
        # The engine sends players in a fixed order, which turn dumps repeat.
        for _ in range(player_count):
            player = reader.recv(Player)
            players[player.id] = player
        board = reader.recv(Board)
        game = cls(my_id, players, board)
        for player in players.values():
            board.add_structure(player.shipyard.position, player.shipyard.id)
        return game

    @property
    def constants(self) -> Constants:
        if self._constants is None:
            raise ConfigurationMisuseError('Constants were accessed before being set')
        return self._constants

    @constants.setter
    def constants(self, value):
        if self._constants is not None:
            raise ConfigurationMisuseError('Constants cannot be set a second time')
        self._constants = value

    @property
    def me(self) -> Player:
        return self.players[self.my_id]

    def ready(self, name):
        """Announces the bot's name. The engine's turn clock starts after this."""
        self.engine.send_name(name)

    def update(self):
        with self.engine.reader() as reader:
            reader.update(self)
        logging.info(f'=============== TURN {self.turn} ================')

    def refresh(self, reader):
        self.turn = reader.next(int)
        self.commands.clear()

        ships = {}
        dropoffs = {}
        for _ in range(len(self.players)):
            player_id = PlayerId.create(reader)
            player = self.players.get(player_id)
            if player is None:
                raise UnknownEntityError(f'Turn {self.turn} mentions unknown player {player_id}')
            ship_count = reader.next(int)
            dropoff_count = reader.next(int)
            player.halite = reader.next(int)

            player.ship_ids = []
            for _ in range(ship_count):
                ship = self._read_entity(reader, ShipId, Ship, self.ships, player_id)
                ships[ship.id] = ship
                player.ship_ids.append(ship.id)

            player.dropoff_ids = []
            for _ in range(dropoff_count):
                dropoff = self._read_entity(reader, DropoffId, Dropoff, self.dropoffs, player_id)
                dropoffs[dropoff.id] = dropoff
                player.dropoff_ids.append(dropoff.id)

        reader.update(self.board)

        self._drop_missing(ships, dropoffs)
        self.ships = ships
        self.dropoffs = dropoffs
        self._stamp_board()

    @staticmethod
    def _read_entity(reader, id_type, entity_type, known, player_id):
        entity_id = id_type.create(reader)
        entity = known.get(entity_id)
        if entity is None:
            entity = entity_type.create(reader, entity_id, player_id)
            logging.debug(f'New {entity}')
        else:
            reader.update(entity)
            entity.owner_id = player_id
        return entity

    def _drop_missing(self, ships, dropoffs):
        for ship_id in self.ships.keys() - ships.keys():
            logging.debug(f'Lost {self.ships[ship_id]}')
        # Dropoffs are permanent.
        missing = sorted(self.dropoffs.keys() - dropoffs.keys())
        if missing:
            lost = ', '.join(repr(self.dropoffs[dropoff_id]) for dropoff_id in missing)
            raise ProtocolDesyncError(f'Turn {self.turn} no longer reports {lost}')

    def _stamp_board(self):
        # Structures of different players are assumed never to share a cell; Board raises if they do.
        self.board.clear_ships()
        for player in self.players.values():
            for ship_id in player.ship_ids:
                self.board.add_ship(self.ships[ship_id])
            self.board.add_structure(player.shipyard.position, player.shipyard.id)
            for dropoff_id in player.dropoff_ids:
                if dropoff_id not in self._stamped_dropoffs:
                    self.board.add_structure(self.dropoffs[dropoff_id].position, dropoff_id)
                    self._stamped_dropoffs.add(dropoff_id)

    def spawn_ship(self):
        """
        Queues a spawn and places the future ship on the shipyard right away, so the rest of this turn's planning sees
        the shipyard as occupied. The engine's next dump decides the real id.
        """
        ship_id = ShipId(max(self.ships).value + 1) if self.ships else ShipId(0)
        ship = Ship(self.my_id, ship_id, self.me.shipyard.position)
        self.board.add_ship(ship)
        self.ships[ship_id] = ship
        self.me.ship_ids.append(ship_id)
        self.commands.append(SpawnShipCommand())
        return ship

    def move_ship(self, ship, direction):
        self.commands.append(MoveCommand(ship.id, direction))

    def collect_halite(self, ship):
        self.commands.append(CollectCommand(ship.id))

    def convert_to_dropoff(self, ship):
        self.commands.append(ConstructDropoffCommand(ship.id))

    def end_turn(self):
        self.engine.send_commands(self.commands)

    def __repr__(self):
        return f'Game(my_id={self.my_id}, players={len(self.players)}, turn={self.turn})'
