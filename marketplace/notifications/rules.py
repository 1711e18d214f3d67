from marketplace.notifications.channels import Channel
from marketplace.notifications.events import MarketplaceEvent


NOTIFICATION_RULES = {

    MarketplaceEvent.CHECKOUT_COMPLETED: {
        Channel.INAPP_ADMIN: True,
        Channel.INAPP_SELLER: True,
    },

    MarketplaceEvent.DISPUTE_RAISED: {
        Channel.INAPP_ADMIN: True,
        Channel.INAPP_SELLER: True,
    },

    MarketplaceEvent.DISPUTE_UPDATED: {
        Channel.INAPP_SELLER: True,
        Channel.INAPP_BUYER: True,
    },

}
