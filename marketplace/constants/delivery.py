from enum import Enum


class DeliveryType(str, Enum):
    HOME_DELIVERY = "home_delivery"
    INSTANT_PICKUP = "instant_pickup"
