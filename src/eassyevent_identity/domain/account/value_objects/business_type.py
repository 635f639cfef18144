from enum import Enum


class BusinessType(str, Enum):
    """Kind of venue an account operates."""

    BANQUET_HALL = "Banquet Hall"
    WEDDING_HALL = "Wedding Hall"
    CONFERENCE_CENTER = "Conference Center"
    HOTEL = "Hotel"
    RESORT = "Resort"
    COMMUNITY_CENTER = "Community Center"
    RESTAURANT = "Restaurant"
    OUTDOOR_VENUE = "Outdoor Venue"
    AUDITORIUM = "Auditorium"
    CONVENTION_CENTER = "Convention Center"
    FARM_HOUSE = "Farm House"
    PALACE = "Palace"
    HERITAGE_VENUE = "Heritage Venue"
    ROOFTOP = "Rooftop"
    GARDEN = "Garden"
    BEACH_RESORT = "Beach Resort"
    HILL_STATION_RESORT = "Hill Station Resort"
    CORPORATE_OFFICE_SPACE = "Corporate Office Space"
    EDUCATIONAL_INSTITUTION = "Educational Institution"
    RELIGIOUS_CENTER = "Religious Center"
