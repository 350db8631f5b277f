from models.database import Base, get_db, init_db
from models.domain import EtlState, RejectedShoe, ShoeResult

__all__ = [
    "Base",
    "get_db",
    "init_db",
    "ShoeResult",
    "EtlState",
    "RejectedShoe",
]
