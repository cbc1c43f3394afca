import uuid
from typing import List, NamedTuple, Optional, Union


class ChannelInfo(NamedTuple):
    id: uuid.UUID
    parameter: str   # value for the Click-to-Run /changesetting Channel= switch
    name: str


# Office CDN channel GUIDs. The two perpetual (volume licensed) entries have no
# published update channel, hence the "N/A" name.
CHANNELS = (
    ChannelInfo(uuid.UUID("492350f6-3a01-4f97-b9c0-c7c6ddf67d60"), "Current", "Current Channel"),
    ChannelInfo(uuid.UUID("64256afe-f5d9-4f86-8936-8840a6a4f5be"), "CurrentPreview", "Current (Preview)"),
    ChannelInfo(uuid.UUID("7ffbc6bf-bc32-4f92-8982-f9dd17fd3114"), "SemiAnnual", "Semi-Annual Enterprise Channel"),
    ChannelInfo(uuid.UUID("b8f9b850-328d-4355-9145-c59439a0c4cf"), "SemiAnnualPreview", "Semi-Annual Enterprise Channel (Preview)"),
    ChannelInfo(uuid.UUID("55336b82-a18d-4dd6-b5f6-9e5095c314a6"), "MonthlyEnterprise", "Monthly Enterprise Channel"),
    ChannelInfo(uuid.UUID("5440fd1f-7ecb-4221-8110-145efaa6372f"), "BetaChannel", "Beta Channel"),
    ChannelInfo(uuid.UUID("f2e724c1-748f-4b47-8fb8-8e0d210e9208"), "PerpetualVL2019", "N/A"),
    ChannelInfo(uuid.UUID("2e148de9-61c8-4051-b103-4af54baffbb4"), "PerpetualVL2021", "N/A"),
)


def _as_uuid(value) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value).strip().strip("{}"))
    except ValueError:
        return None


def lookup_channels(name: Optional[str] = None, id: Union[str, uuid.UUID, None] = None) -> List[ChannelInfo]:
    """
    Exact-match lookup against CHANNELS.
      lookup_channels()                       -> all eight entries
      lookup_channels(name="Beta Channel")    -> [ChannelInfo(..., "Beta Channel")]
      lookup_channels(id="5440fd1f-...")      -> same
    Names are case-sensitive; no match gives [].
    """
    if name is not None and id is not None:
        raise ValueError("look up by name or by id, not both")
    if name is not None:
        return [c for c in CHANNELS if c.name == name]
    if id is not None:
        wanted = _as_uuid(id)
        return [c for c in CHANNELS if c.id == wanted] if wanted else []
    return list(CHANNELS)


def resolve_channel_name(channel_or_guid) -> str:
    """A GUID resolves to its channel name; anything else is taken as a name verbatim."""
    guid = _as_uuid(channel_or_guid)
    if guid is not None:
        found = lookup_channels(id=guid)
        if found:
            return found[0].name
    return str(channel_or_guid)
