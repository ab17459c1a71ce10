from models import db, new_id


class Category(db.Model):
    __tablename__ = "category"

    id = db.Column(db.String(32), primary_key=True, default=new_id)
    name = db.Column(db.String(100), unique=True, nullable=False)
    description = db.Column(db.String(500), nullable=True)

    def to_dict(self):
        return {"id": self.id, "name": self.name, "description": self.description}
