import io
import logging
import random
import re

import pytest

from engine import Engine
from entity import CollectCommand, MoveCommand, ShipId, SpawnShipCommand
from errors import ProtocolParseError
from game import Game
from my_bot import RandomBot, main, parse_args, pretty_error, run
from test_game import opening

TURN = '1\n' \
       '0 2 0 5000\n' \
       '1 2 2 0\n' \
       '2 3 3 0\n' \
       '1\n' \
       '3 3 500\n'


def test_random_bot_commands():
    game = Game.start(Engine(io.StringIO(opening([(0, 0, 0)], 5, 5) + TURN), io.StringIO()))
    game.update()
    commands = RandomBot(game.my_id, random.Random(0)).generate_commands(game)
    assert isinstance(commands[0], MoveCommand) and commands[0].target_id == ShipId(1)
    assert commands[1] == CollectCommand(ShipId(2))
    assert commands[2] == SpawnShipCommand()


def test_random_bot_moves_full_ships_and_respects_occupied_shipyard():
    turn = '1\n0 1 0 5000\n0 0 0 1000\n1\n0 0 900\n'
    game = Game.start(Engine(io.StringIO(opening([(0, 0, 0)], 5, 5) + turn), io.StringIO()))
    game.update()
    commands = RandomBot(game.my_id, random.Random(1)).generate_commands(game)
    assert len(commands) == 1
    assert isinstance(commands[0], MoveCommand)


def test_run_plays_until_engine_closes():
    out = io.StringIO()
    run(parse_args(['-n', 'Tester']), Engine(io.StringIO(opening([(0, 0, 0)], 5, 5) + TURN), out))
    assert re.fullmatch(r'Tester\nm 1 [nesw] m 2 o g \n', out.getvalue())


def test_parse_args_defaults():
    args = parse_args([])
    assert not args.debug
    assert args.log_file is None
    assert args.name.startswith('MyBot-')


def test_pretty_error_follows_causes():
    try:
        try:
            int('x')
        except ValueError as exc:
            raise ProtocolParseError("Expected int, got 'x'") from exc
    except ProtocolParseError as e:
        pretty = pretty_error(e)
    lines = pretty.split('\n')
    assert lines[0] == "Expected int, got 'x'"
    assert lines[1].startswith('     Due to: invalid literal for int()')


def test_main_reports_fatal_errors(monkeypatch, capsys):
    monkeypatch.setattr('sys.stdin', io.StringIO('{not json\n'))
    with pytest.raises(SystemExit) as info:
        main(['-n', 'Tester'])
    assert info.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith('Fatal error: Invalid constants from engine: <root>\n     Due to: ')


def test_main_exits_cleanly_when_game_ends(monkeypatch, capsys):
    monkeypatch.setattr('sys.stdin', io.StringIO(opening([(0, 0, 0)], 3, 3)))
    main(['-n', 'Tester'])
    assert capsys.readouterr().out == 'Tester\n'


def test_main_exits_with_error_on_truncated_turn(monkeypatch, capsys):
    monkeypatch.setattr('sys.stdin', io.StringIO(opening([(0, 0, 0)], 5, 5) + '1\n0 2 0 5000\n1 2 2 0\n'))
    with pytest.raises(SystemExit) as info:
        main(['-n', 'Tester'])
    assert info.value.code == 1
    assert capsys.readouterr().err.startswith('Fatal error: Engine closed the input stream in the middle of a turn')


def test_debug_writes_log_file(monkeypatch, capsys, tmp_path):
    monkeypatch.setattr('sys.stdin', io.StringIO(opening([(0, 0, 0)], 5, 5) + TURN))
    log_file = tmp_path / 'bot.log'
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    # A fresh bot process starts without handlers.
    root.handlers.clear()
    try:
        main(['-d', '-l', str(log_file), '-n', 'Tester'])
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
    assert capsys.readouterr().out.startswith('Tester\n')
    text = log_file.read_text()
    assert 'Game started' in text
    assert 'TURN 1' in text
