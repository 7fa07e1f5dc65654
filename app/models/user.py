"""
app/models/user.py

Purpose: User record model

- One row of the Users sheet
- Column order and A1 letters for targeted cell writes
- Conversion between sheet rows and typed records
"""

from pydantic import BaseModel
from typing import List

# Positional layout of the Users sheet, columns A..I
USER_COLUMNS = ["UserID", "Name", "ChatID", "Phone", "Aadhar", "Status", "Role", "Lang", "JoinDate"]

COLUMN_LETTERS = {name: chr(ord("A") + index) for index, name in enumerate(USER_COLUMNS)}

CHAT_ID_COLUMN = USER_COLUMNS.index("ChatID")


class UserRecord(BaseModel):
    user_id: str = ""
    name: str = ""
    chat_id: str
    phone: str = ""
    aadhar: str = ""
    status: str = ""
    role: str = ""
    language: str = ""
    joined: str = ""

    @classmethod
    def from_row(cls, row: List[str]) -> "UserRecord":
        """Builds a record from a sheet row, padding missing trailing cells."""
        cells = [str(value) for value in row] + [""] * (len(USER_COLUMNS) - len(row))
        return cls(
            user_id=cells[0],
            name=cells[1],
            chat_id=cells[2],
            phone=cells[3],
            aadhar=cells[4],
            status=cells[5],
            role=cells[6],
            language=cells[7],
            joined=cells[8],
        )

    def to_row(self) -> List[str]:
        return [
            self.user_id,
            self.name,
            self.chat_id,
            self.phone,
            self.aadhar,
            self.status,
            self.role,
            self.language,
            self.joined,
        ]


def user_cell(column: str, row_number: int, sheet: str = "Users") -> str:
    """A1 address of one Users cell, e.g. user_cell("Name", 5) -> "Users!B5"."""
    return f"{sheet}!{COLUMN_LETTERS[column]}{row_number}"
