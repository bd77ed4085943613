def get_db_models():
    """
    Dynamically import models to avoid circular imports.
    Returns the mapped classes so alembic sees every table on Base.metadata.
    """
    from models.user import User
    from models.transaction import Transaction

    return [User, Transaction]
