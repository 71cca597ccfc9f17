from pydantic import BaseModel, ConfigDict, Field, ValidationError

from errors import ProtocolParseError


class Constants(BaseModel):
    """Game balance values chosen by the engine. Read-only once the game has started."""
    model_config = ConfigDict(frozen=True, extra='ignore')

    capture_enabled: bool = Field(alias='CAPTURE_ENABLED')
    capture_radius: int = Field(alias='CAPTURE_RADIUS', ge=0)
    default_map_height: int = Field(alias='DEFAULT_MAP_HEIGHT', gt=0)
    default_map_width: int = Field(alias='DEFAULT_MAP_WIDTH', gt=0)
    dropoff_cost: int = Field(alias='DROPOFF_COST', ge=0)
    dropoff_penalty_ratio: int = Field(alias='DROPOFF_PENALTY_RATIO')
    extract_ratio: int = Field(alias='EXTRACT_RATIO', gt=0)
    factor_exp_1: float = Field(alias='FACTOR_EXP_1')
    factor_exp_2: float = Field(alias='FACTOR_EXP_2')
    initial_halite: int = Field(alias='INITIAL_ENERGY', ge=0)
    inspiration_enabled: bool = Field(alias='INSPIRATION_ENABLED')
    inspiration_radius: int = Field(alias='INSPIRATION_RADIUS', ge=0)
    inspiration_ship_count: int = Field(alias='INSPIRATION_SHIP_COUNT', ge=0)
    inspired_bonus_multiplier: float = Field(alias='INSPIRED_BONUS_MULTIPLIER')
    inspired_extract_ratio: int = Field(alias='INSPIRED_EXTRACT_RATIO', gt=0)
    inspired_move_cost_ratio: int = Field(alias='INSPIRED_MOVE_COST_RATIO', gt=0)
    max_cell_production: int = Field(alias='MAX_CELL_PRODUCTION')
    max_halite: int = Field(alias='MAX_ENERGY', gt=0, description='Carrying capacity of a ship')
    max_players: int = Field(alias='MAX_PLAYERS', gt=0)
    max_turns: int = Field(alias='MAX_TURNS', gt=0)
    max_turn_threshold: int = Field(alias='MAX_TURN_THRESHOLD')
    min_cell_production: int = Field(alias='MIN_CELL_PRODUCTION')
    min_turns: int = Field(alias='MIN_TURNS')
    min_turn_threshold: int = Field(alias='MIN_TURN_THRESHOLD')
    move_cost_ratio: int = Field(alias='MOVE_COST_RATIO', gt=0)
    new_entity_halite_cost: int = Field(alias='NEW_ENTITY_ENERGY_COST', ge=0, description='Price of a new ship')
    persistence: float = Field(alias='PERSISTENCE')
    ships_above_for_capture: int = Field(alias='SHIPS_ABOVE_FOR_CAPTURE')
    strict_errors: bool = Field(alias='STRICT_ERRORS')
    game_seed: int = Field(alias='game_seed')

    @classmethod
    def from_json(cls, text):
        try:
            return cls.model_validate_json(text)
        except ValidationError as exc:
            fields = ', '.join('.'.join(str(part) for part in error['loc']) or '<root>' for error in exc.errors())
            raise ProtocolParseError(f'Invalid constants from engine: {fields}') from exc

    @classmethod
    def create(cls, reader):
        return cls.from_json(reader.next_line())
