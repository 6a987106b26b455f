from app.models.user import User
from app.models.facility import Facility
from app.models.court import Court
from app.models.slot import Slot
from app.models.booking import Booking
from app.models.review import Review

# This makes the models directory a Python package and ensures all models are loaded
