"""ORM Models — SQLAlchemy declarative models for the skin tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - Primary keys are lower-cased names

Design Decisions:
    - One file per table; both imported here so metadata is complete for create_all
"""

from skincache.models.player_skin import PlayerSkin  # noqa: F401
from skincache.models.skin_record import SkinRecord  # noqa: F401
