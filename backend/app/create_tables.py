from app.db import engine, Base
# register every model on the metadata
from app.models import *

def main():
    """Create all database tables"""
    Base.metadata.create_all(bind=engine)
    print("All tables created successfully.")

if __name__ == "__main__":
    main()
