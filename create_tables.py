from ecoscan.db.base import Base
from ecoscan.db.session import engine
import ecoscan.db.models  # noqa: F401

if __name__ == "__main__":
    print("Creating tables...")
    Base.metadata.create_all(bind=engine)
    print("Tables created.")
