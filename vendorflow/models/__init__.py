# Models package - database tables
from vendorflow.models.vendor import Vendor, ChannelStatus, VendorStatus
from vendorflow.models.sequence import VendorSequence
from vendorflow.models.outreach_log import OutreachLog, LogActions
from vendorflow.models.setting import Setting
