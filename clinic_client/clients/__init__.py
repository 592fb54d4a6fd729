"""
Clinic API Clients

Async resource clients sharing one configured ``httpx.AsyncClient``.
"""

from clinic_client.clients.auth_client import AuthClient
from clinic_client.clients.base_client import ResourceClient
from clinic_client.clients.blog_client import BlogClient
from clinic_client.clients.chat_client import ChatClient, ChatError, ChatErrorCode, to_chat_error
from clinic_client.clients.consultation_package_client import ConsultationPackageClient
from clinic_client.clients.consultation_service_client import ConsultationServiceClient
from clinic_client.clients.doctor_client import DoctorClient
from clinic_client.clients.icd_client import IcdClient
from clinic_client.clients.image_client import ImageClient, ImageUploadOptions
from clinic_client.clients.medical_examination_client import ExaminationQuery, MedicalExaminationClient
from clinic_client.clients.medication_client import MedicationClient
from clinic_client.clients.medicine_client import MedicineClient
from clinic_client.clients.payment_client import PaymentClient
from clinic_client.clients.prescription_client import PrescriptionClient
from clinic_client.clients.promotion_client import PromotionClient
from clinic_client.clients.room_client import RoomClient
from clinic_client.clients.schedule_client import DateRange, ScheduleClient
from clinic_client.clients.specialty_client import SpecialtyClient
from clinic_client.clients.user_client import UserClient
from clinic_client.clients.waiting_message_client import WaitingMessageClient
from clinic_client.clients.weekly_package_client import WeeklyPackageClient

__all__ = [
    "AuthClient",
    "BlogClient",
    "ChatClient",
    "ChatError",
    "ChatErrorCode",
    "ConsultationPackageClient",
    "ConsultationServiceClient",
    "DateRange",
    "DoctorClient",
    "ExaminationQuery",
    "IcdClient",
    "ImageClient",
    "ImageUploadOptions",
    "MedicalExaminationClient",
    "MedicationClient",
    "MedicineClient",
    "PaymentClient",
    "PrescriptionClient",
    "PromotionClient",
    "ResourceClient",
    "RoomClient",
    "ScheduleClient",
    "SpecialtyClient",
    "UserClient",
    "WaitingMessageClient",
    "WeeklyPackageClient",
    "to_chat_error",
]
