from enum import Enum


class Channel(str, Enum):
    INAPP_ADMIN = "inapp_admin"
    INAPP_SELLER = "inapp_seller"
    INAPP_BUYER = "inapp_buyer"
