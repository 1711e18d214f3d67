from marketplace.models.seller import Seller
from marketplace.models.transaction import Transaction
from marketplace.models.dispute import Dispute
from marketplace.models.notifications import Notification
from marketplace.models.site_settings import SiteSettings
