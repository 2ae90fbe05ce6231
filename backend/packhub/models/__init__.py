from .user import User
from .supplier_profile import SupplierProfile
from .inquiry import Inquiry, InquirySupplier
from .quote import Quote
from .message import Message
from .file_attachment import FileAttachment
from .rating import Rating
__all__ = ["User","SupplierProfile","Inquiry","InquirySupplier","Quote","Message","FileAttachment","Rating"]
