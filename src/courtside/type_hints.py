"""Type hints used in Courtside."""

from typing import Callable, List, Literal, Optional, Tuple

# Side string constants (for runtime use)
SIDE_A = "A"
SIDE_B = "B"
SIDES = (SIDE_A, SIDE_B)

# Side type alias (for type hints)
Side = Literal["A", "B"]
# None when a completed match is tied
MaybeSide = Optional[Side]

# Participants are identified by their resolved display name
ParticipantId = str
Participants = List[ParticipantId]
# Both players on one side of the net
Pair = Tuple[ParticipantId, ParticipantId]
# (idle, recent) split of a roster for one round
IdlePartition = Tuple[Participants, Participants]

MatchId = int

# Subscriber signature: (event, snapshot)
Listener = Callable[["TournamentEvent", "TournamentSnapshot"], None]

#  LocalWords:  IdlePartition
