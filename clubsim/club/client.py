"""
Client directory - who is inside the club and where they sit.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class ClientStatus(Enum):
    """Presence of a client in the club."""
    NOT_PRESENT = "not_present"  # No directory entry
    UNSEATED = "unseated"        # Inside, no table
    SEATED = "seated"            # Inside, at a table


@dataclass
class ClientInfo:
    """
    Directory entry of a client inside the club.

    Attributes:
        name: Client identifier
        arrival_time: When the client entered (minutes since midnight)
        status: UNSEATED or SEATED
        table: Table number, set only while SEATED
    """
    name: str
    arrival_time: int
    status: ClientStatus = field(default=ClientStatus.UNSEATED)
    table: Optional[int] = field(default=None)

    def __post_init__(self):
        if self.status == ClientStatus.NOT_PRESENT:
            raise ValueError("A directory entry cannot be NOT_PRESENT")
        if (self.status == ClientStatus.SEATED) != (self.table is not None):
            raise ValueError(f"Client {self.name}: table must be set exactly when seated")


class ClientDirectory:
    """
    Map of clients currently inside the club.
    """

    def __init__(self):
        self._clients: Dict[str, ClientInfo] = {}

    def add(self, name: str, arrival_time: int) -> ClientInfo:
        if name in self._clients:
            raise KeyError(f"Client {name} is already in the club")
        info = ClientInfo(name=name, arrival_time=arrival_time)
        self._clients[name] = info
        return info

    def get(self, name: str) -> Optional[ClientInfo]:
        return self._clients.get(name)

    def status_of(self, name: str) -> ClientStatus:
        info = self._clients.get(name)
        if info is None:
            return ClientStatus.NOT_PRESENT
        return info.status

    def seat(self, name: str, table: int) -> None:
        info = self._clients[name]
        info.status = ClientStatus.SEATED
        info.table = table

    def unseat(self, name: str) -> None:
        info = self._clients[name]
        info.status = ClientStatus.UNSEATED
        info.table = None

    def remove(self, name: str) -> ClientInfo:
        return self._clients.pop(name)

    def names(self) -> List[str]:
        """Names of all clients inside, in lexicographic order."""
        return sorted(self._clients)

    def __contains__(self, name: str) -> bool:
        return name in self._clients

    def __len__(self) -> int:
        return len(self._clients)
