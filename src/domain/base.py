from sqlmodel import SQLModel


class BaseModel(SQLModel):
    """Base class for all persisted domain entities"""

    pass
