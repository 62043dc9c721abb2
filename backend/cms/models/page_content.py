from cms.extensions import db

class PageContentRecord(db.Model):
    """
    A single stored content value.

    ``group_name`` is empty for fields outside a group and ``data_name`` is
    empty unless the value belongs to a multiple value field.
    """
    __tablename__ = "page_content"

    page_id = db.Column(db.Integer, db.ForeignKey("page.id"), primary_key=True)
    field_name = db.Column(db.String(100), primary_key=True)
    group_name = db.Column(db.String(100), primary_key=True, default="")
    sequence = db.Column(db.Integer, primary_key=True, default=0)
    data_name = db.Column(db.String(100), primary_key=True, default="")
    value_string = db.Column(db.Text, nullable=True)
