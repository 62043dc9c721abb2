from cms.extensions import db
from cms.utils.dates import now_ts

class BaseModel(db.Model):
    __abstract__ = True

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    # Epoch seconds, matching every other timestamp column in the page tables
    created_at = db.Column(db.Integer, default=now_ts, index=True)

    def __init__(self, **kwargs):
        """
        Dummy __init__ to satisfy static type checkers (Pylance, MyPy).
        SQLAlchemy ORM will populate fields dynamically.
        """
        super().__init__(**kwargs)
