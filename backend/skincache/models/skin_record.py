"""SkinRecord ORM — cached signed texture per lower-cased skin name.

Invariants:
    - value and signature round-trip byte-for-byte (Text, no transformation)
    - timestamp is epoch millis; 0 pins the record

Design Decisions:
    - BigInteger timestamp: epoch millis overflow 32-bit integers
    - Index on timestamp: purge scans by age
"""

from sqlalchemy import BigInteger, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from skincache.db.base import Base


class SkinRecord(Base):
    __tablename__ = "skins"

    skin_name: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    signature: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[int | None] = mapped_column(
        BigInteger, nullable=True, index=True,
    )
