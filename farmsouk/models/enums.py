# farmsouk/models/enums.py
# Contains all Enum definitions for the models.
import enum


class ProductStatusEnum(enum.Enum):
    APPROVED = "approved"
    PENDING = "pending"
    REJECTED = "rejected"
    DELETED = "deleted"

class ProductSourceEnum(enum.Enum):
    SEED = "seed"
    FARMER = "farmer"

class OrderStatusEnum(enum.Enum):
    NEW = "new"
