from sqlalchemy import Column, Integer, Text
from pgvector.sqlalchemy import Vector

from verifier.database import Base
from verifier.schemas import ScratchRow

VECTOR_DIM = 3


class ScratchVector(Base):
    """
    Scratch table for the similarity search check.
    Created and dropped within a single run.
    """
    __tablename__ = "test_vectors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    content = Column(Text)
    embedding = Column(Vector(VECTOR_DIM))


SAMPLE_ROWS = [
    ScratchRow(content="First document", embedding=[1, 2, 3]),
    ScratchRow(content="Second document", embedding=[4, 5, 6]),
    ScratchRow(content="Third document", embedding=[1, 2, 4]),
]

REFERENCE_VECTOR = [1, 2, 3]
