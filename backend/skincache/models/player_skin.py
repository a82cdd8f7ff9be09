"""PlayerSkin ORM — maps a lower-cased player name to a skin identifier.

Invariants:
    - player_name is the primary key (lower-cased by the engine)
    - skin_name may be an account name, a custom label or an image URL
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from skincache.db.base import Base


class PlayerSkin(Base):
    __tablename__ = "player_skins"

    player_name: Mapped[str] = mapped_column(String(64), primary_key=True)
    skin_name: Mapped[str] = mapped_column(Text, nullable=False)
