import argparse
import logging
import random
import sys

from entity import CollectCommand, Direction, MoveCommand, SpawnShipCommand
from errors import EngineClosedError
from game import Game

__version__ = '0.1.0'

SPAWN_UNTIL_TURN = 400


class RandomBot:
    def __init__(self, player_id, rng=None):
        self.id = player_id
        self.rng = rng if rng is not None else random.Random()

    def generate_commands(self, game):
        me = game.players[self.id]
        constants = game.constants
        commands = []
        for ship_id in me.ship_ids:
            ship = game.ships[ship_id]
            cell = game.board[ship.position]
            if cell.halite < constants.max_halite / 10 or ship.is_full(constants):
                commands.append(MoveCommand(ship.id, self.rng.choice(Direction.all())))
            else:
                commands.append(CollectCommand(ship.id))

        if (game.turn <= SPAWN_UNTIL_TURN
                and me.halite >= constants.new_entity_halite_cost
                and not game.board[me.shipyard.position].is_occupied()):
            commands.append(SpawnShipCommand())
        return commands

    def __repr__(self):
        return f'RandomBot(id={self.id})'


def pretty_error(err):
    """Formats err followed by every exception that caused it."""
    pretty = str(err) or err.__class__.__name__
    cause = err.__cause__ or err.__context__
    while cause is not None:
        pretty += f'\n     Due to: {str(cause) or cause.__class__.__name__}'
        cause = cause.__cause__ or cause.__context__
    return pretty


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='My Halite III bot. See https://halite.io.')
    parser.add_argument('-d', '--debug', action='store_true', help='Whether to enable logging')
    parser.add_argument('-l', '--log-file', help='Override the name of the log file')
    parser.add_argument('-n', '--name', default=f'MyBot-{__version__}', help='Override the name of the bot')
    return parser.parse_args(argv)


def run(args, engine=None):
    # Nothing may reach stdout, which belongs to the engine, and the log file name needs the game seed.
    logging.getLogger().addHandler(logging.NullHandler())

    game = Game.start(engine)

    if args.debug:
        logging.basicConfig(
            filename=args.log_file or f'{args.name}-{game.constants.game_seed}-{game.my_id}.log',
            filemode='w',
            level=logging.DEBUG,
            force=True,
        )
    logging.info(f'Game started: {len(game.players)} players on a {game.board.width}x{game.board.height} board, '
                 f'playing as {game.my_id}')

    bot = RandomBot(game.my_id)

    game.ready(args.name)
    logging.info(f'Successfully initialized {args.name}! Player ID is {game.my_id}')

    while True:
        try:
            game.update()
        except EngineClosedError:
            logging.info(f'Engine closed the game after turn {game.turn}')
            return
        game.commands.extend(bot.generate_commands(game))
        game.end_turn()


def main(argv=None):
    args = parse_args(argv)
    try:
        run(args)
    except Exception as e:
        pretty = pretty_error(e)
        logging.error(f'Fatal error: {pretty}')
        print(f'Fatal error: {pretty}', file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
