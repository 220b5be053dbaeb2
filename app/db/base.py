from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Models register themselves by importing Base from here; app.db.models imports them all
