from sqlalchemy import Column, ForeignKey, Integer, Text, UniqueConstraint, text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()
metadata = Base.metadata


class BusinessSettings(Base):
    __tablename__ = 'settings'

    id = Column(Text, primary_key=True, server_default=text("'main'"))
    business_name = Column(Text, nullable=False, server_default=text("'AutoSpa'"))
    whatsapp_number = Column(Text)
    address = Column(Text)
    welcome_message = Column(Text)
    currency = Column(Text, nullable=False, server_default=text("'PYG'"))
    hero_image_url = Column(Text)
    open_time = Column(Text, nullable=False, server_default=text("'08:00'"))
    close_time = Column(Text, nullable=False, server_default=text("'18:00'"))
    slot_duration = Column(Integer, nullable=False, server_default=text('30'))
    max_slots_per_time = Column(Integer, nullable=False, server_default=text('1'))
    working_days = Column(Text, nullable=False, server_default=text("'1,2,3,4,5,6'"))
    booking_buffer_minutes = Column(Integer, nullable=False, server_default=text('10'))
    timezone = Column(Text, nullable=False, server_default=text("'America/Asuncion'"))
    updated_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))


class Services(Base):
    __tablename__ = 'services'

    name = Column(Text, nullable=False)
    price = Column(Integer, nullable=False)
    duration_min = Column(Integer, nullable=False)
    id = Column(Integer, primary_key=True)
    description = Column(Text)
    is_active = Column(Integer, nullable=False, server_default=text('1'))
    sort_order = Column(Integer, nullable=False, server_default=text('0'))
    created_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))

    bookings = relationship('Bookings', back_populates='service')


class Customers(Base):
    __tablename__ = 'customers'

    name = Column(Text, nullable=False)
    phone = Column(Text, nullable=False, unique=True)
    id = Column(Integer, primary_key=True)
    created_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))

    vehicles = relationship('Vehicles', back_populates='customer')
    bookings = relationship('Bookings', back_populates='customer')


class Vehicles(Base):
    __tablename__ = 'vehicles'

    plate = Column(Text, nullable=False, unique=True)
    customer_id = Column(ForeignKey('customers.id', ondelete='CASCADE'), nullable=False)
    id = Column(Integer, primary_key=True)
    model = Column(Text)
    created_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))

    customer = relationship('Customers', back_populates='vehicles')
    bookings = relationship('Bookings', back_populates='vehicle')


class Bookings(Base):
    __tablename__ = 'bookings'
    __table_args__ = (
        # seat is NULL for cancelled bookings; NULLs never collide
        UniqueConstraint('date', 'time', 'seat', name='uq_bookings_slot_seat'),
    )

    reference_code = Column(Text, nullable=False, unique=True)
    date = Column(Text, nullable=False, index=True)  # YYYY-MM-DD, business-local
    time = Column(Text, nullable=False)  # HH:MM
    payment_method = Column(Text, nullable=False)
    total_price = Column(Integer, nullable=False)
    customer_id = Column(ForeignKey('customers.id', ondelete='CASCADE'), nullable=False)
    vehicle_id = Column(ForeignKey('vehicles.id'), nullable=False)
    service_id = Column(ForeignKey('services.id', ondelete='RESTRICT'), nullable=False)
    status = Column(Text, nullable=False, server_default=text("'PENDING'"))
    id = Column(Integer, primary_key=True)
    seat = Column(Integer)
    notes = Column(Text)
    created_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))
    updated_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))

    customer = relationship('Customers', back_populates='bookings')
    vehicle = relationship('Vehicles', back_populates='bookings')
    service = relationship('Services', back_populates='bookings')


class PaymentMethods(Base):
    __tablename__ = 'payment_methods'

    name = Column(Text, nullable=False)
    id = Column(Integer, primary_key=True)
    is_active = Column(Integer, nullable=False, server_default=text('1'))
    created_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))
