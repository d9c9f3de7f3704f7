"""Pydantic models describing the ScoreboardLive API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


def _int_from_text(value: object) -> object:
    """The API transports integers as strings; blanks mean zero."""

    if value is None:
        return 0
    if isinstance(value, str):
        stripped = value.strip()
        return int(stripped) if stripped else 0
    return value


def _none_to_blank(value: object) -> object:
    return "" if value is None else value


class ScoreboardBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ScoreboardResponse(ScoreboardBaseModel):
    errors: list[str] = Field(default_factory=list)


class MatchPayload(ScoreboardBaseModel):
    match_id: int = Field(default=0, alias="matchid")
    sequence_number: int = Field(default=0, alias="sequencenumber")
    team1_player1_name: str = Field(default="", alias="team1player1name")
    team1_player1_team: str = Field(default="", alias="team1player1team")
    team1_player2_name: str = Field(default="", alias="team1player2name")
    team1_player2_team: str = Field(default="", alias="team1player2team")
    team2_player1_name: str = Field(default="", alias="team2player1name")
    team2_player1_team: str = Field(default="", alias="team2player1team")
    team2_player2_name: str = Field(default="", alias="team2player2name")
    team2_player2_team: str = Field(default="", alias="team2player2team")
    status: str = ""
    category: str = ""
    start_time: str | None = Field(default=None, alias="starttime")
    umpire: str = ""
    service_judge: str = Field(default="", alias="servicejudge")

    _parse_ints = field_validator("match_id", "sequence_number", mode="before")(_int_from_text)
    _blank_strings = field_validator(
        "team1_player1_name",
        "team1_player1_team",
        "team1_player2_name",
        "team1_player2_team",
        "team2_player1_name",
        "team2_player1_team",
        "team2_player2_name",
        "team2_player2_team",
        "status",
        "category",
        "umpire",
        "service_judge",
        mode="before",
    )(_none_to_blank)

    @field_serializer("match_id", "sequence_number")
    def _serialize_int(self, value: int) -> str:
        return str(value)


class MatchResponse(ScoreboardResponse):
    match: MatchPayload


class MatchesResponse(ScoreboardResponse):
    matches: list[MatchPayload] = Field(default_factory=list)


class CourtPayload(ScoreboardBaseModel):
    court_id: int = Field(alias="courtid")
    name: str

    _parse_id = field_validator("court_id", mode="before")(_int_from_text)


class CourtsResponse(ScoreboardResponse):
    courts: list[CourtPayload] = Field(default_factory=list)
