from mongoengine import BooleanField, Document, FloatField, StringField

MONGO_ALIAS = "catalog"


class ProductDocument(Document):
    """
    Stored shape of a product in the document store.

    The field rules repeat the ones in ProductIn so that documents written
    outside the API (seed scripts, shell) still hold the same invariants.
    """

    name = StringField(required=True)
    price = FloatField(required=True, min_value=0)
    available = BooleanField(required=True, default=True)

    meta = {"collection": "products", "db_alias": MONGO_ALIAS}

    def __repr__(self):
        return f"<ProductDocument id={self.id} name={self.name}>"
