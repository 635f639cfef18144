from enum import Enum


class Amenity(str, Enum):
    """Facilities a venue can advertise."""

    AIR_CONDITIONING = "Air Conditioning"
    PARKING = "Parking"
    CATERING_SERVICE = "Catering Service"
    SOUND_SYSTEM = "Sound System"
    LIGHTING = "Lighting"
    STAGE = "Stage"
    DANCE_FLOOR = "Dance Floor"
    BRIDAL_ROOM = "Bridal Room"
    GUEST_ROOMS = "Guest Rooms"
    VALET_PARKING = "Valet Parking"
    SECURITY = "Security"
    WIFI = "WiFi"
    GENERATOR_BACKUP = "Generator Backup"
    GARDEN_AREA = "Garden Area"
    SWIMMING_POOL = "Swimming Pool"
    SPA_SERVICES = "Spa Services"
    TRANSPORTATION = "Transportation"
    DECORATION_SERVICES = "Decoration Services"
    PHOTOGRAPHY_SERVICES = "Photography Services"
    DJ_SERVICES = "DJ Services"
