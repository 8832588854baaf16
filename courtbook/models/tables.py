from sqlalchemy import Column, Float, ForeignKey, Index, Integer, Text, text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()
metadata = Base.metadata


class SportTypes(Base):
    __tablename__ = 'sport_types'

    name = Column(Text, nullable=False, unique=True)
    max_people = Column(Integer, nullable=False)
    id = Column(Integer, primary_key=True)
    description = Column(Text)
    created_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))

    courts = relationship('Courts', back_populates='sport_type')


class Courts(Base):
    __tablename__ = 'courts'

    name = Column(Text, nullable=False)
    sport_type_id = Column(ForeignKey('sport_types.id'), nullable=False)
    price_per_hour = Column(Float, nullable=False)
    max_people = Column(Integer, nullable=False)
    active = Column(Integer, nullable=False, server_default=text('1'))
    id = Column(Integer, primary_key=True)
    image_url = Column(Text)
    created_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))

    sport_type = relationship('SportTypes', back_populates='courts')
    reservations = relationship('Reservations', back_populates='court')


class UserProfiles(Base):
    __tablename__ = 'user_profiles'

    # External identity (auth provider subject)
    user_id = Column(Text, nullable=False, unique=True)
    name = Column(Text, nullable=False)
    role = Column(Text, nullable=False, server_default=text("'USER'"))
    id = Column(Integer, primary_key=True)
    phone = Column(Text)
    created_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))

    reservations = relationship(
        'Reservations',
        primaryjoin='UserProfiles.user_id == foreign(Reservations.user_id)',
        back_populates='user',
        viewonly=True,
    )


class Reservations(Base):
    __tablename__ = 'reservations'
    __table_args__ = (
        Index('ix_reservations_court_date_status', 'court_id', 'date', 'status'),
    )

    user_id = Column(Text, nullable=False, index=True)
    court_id = Column(ForeignKey('courts.id'), nullable=False)
    date = Column(Text, nullable=False)  # YYYY-MM-DD
    start_time = Column(Text, nullable=False)  # HH:MM:SS
    end_time = Column(Text, nullable=False)  # HH:MM:SS
    status = Column(Text, nullable=False, server_default=text("'ACTIVE'"))
    penalty_applied = Column(Integer, nullable=False, server_default=text('0'))
    id = Column(Integer, primary_key=True)
    created_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))

    court = relationship('Courts', back_populates='reservations')
    user = relationship(
        'UserProfiles',
        primaryjoin='foreign(Reservations.user_id) == UserProfiles.user_id',
        back_populates='reservations',
        viewonly=True,
    )
