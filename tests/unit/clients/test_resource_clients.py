"""
Unit tests for the resource-specific clients.

Each test checks the path, verb and body a client sends and how it unwraps
the backend's answer.
"""

import json
from datetime import datetime, timezone

import httpx
import pytest

from clinic_client.clients import (
    BlogClient,
    ConsultationPackageClient,
    DoctorClient,
    IcdClient,
    ImageClient,
    ImageUploadOptions,
    MedicalExaminationClient,
    MedicationClient,
    MedicineClient,
    PaymentClient,
    PrescriptionClient,
    PromotionClient,
    ScheduleClient,
    SpecialtyClient,
    UserClient,
    WaitingMessageClient,
    WeeklyPackageClient,
)
from clinic_client.schemas.api import QueryOptions
from clinic_client.schemas.enums import PaymentMethod, PaymentStatus, WaitingMessageStatus
from tests.utils import envelope, paginated


class TestDoctorClient:
    """Tests for DoctorClient."""

    @pytest.mark.asyncio
    async def test_get_all_unwraps_nested_pagination(self, http_client, backend) -> None:
        backend.add("GET", "/api/v1/doctor", envelope(paginated([{"_id": "d1"}])))

        page = await DoctorClient(http_client).get_all(QueryOptions(filter={"isActive": True}))

        assert page.data == [{"_id": "d1"}]
        assert json.loads(backend.requests[-1].url.params["options"]) == {"filter": {"isActive": True}}

    @pytest.mark.asyncio
    async def test_find_one_by_user_id_populates_relations(self, http_client, backend) -> None:
        backend.add("GET", "/api/v1/doctor/findOne", envelope({"_id": "d1", "user": {"_id": "u1"}}))

        doctor = await DoctorClient(http_client).find_one_by_user_id("u1")

        assert doctor["user"]["_id"] == "u1"
        options = json.loads(backend.requests[-1].url.params["options"])
        assert options == {"filter": {"user": "u1"}, "populateOptions": {"path": "user specialization"}}

    @pytest.mark.asyncio
    async def test_update_uses_patch(self, http_client, backend) -> None:
        backend.add("PATCH", "/api/v1/doctor/d1", envelope({"_id": "d1", "experience": 10}))

        doctor = await DoctorClient(http_client).update("d1", {"experience": 10})

        assert doctor["experience"] == 10


class TestConsultationPackageClient:
    @pytest.mark.asyncio
    async def test_get_detail_by_id(self, http_client, backend) -> None:
        backend.add("GET", "/api/v1/consultation-package/p1/details", envelope({"_id": "p1", "services": []}))

        detail = await ConsultationPackageClient(http_client).get_detail_by_id("p1")

        assert detail == {"_id": "p1", "services": []}


class TestPaymentClient:
    """Tests for PaymentClient."""

    @pytest.mark.asyncio
    async def test_get_by_status_accepts_enum_and_string(self, http_client, backend) -> None:
        backend.add("GET", "/api/v1/payment/status/paid", envelope(paginated([{"_id": "pay1"}])))
        payments = PaymentClient(http_client)

        by_enum = await payments.get_by_status(PaymentStatus.PAID)
        by_string = await payments.get_by_status("paid")

        assert by_enum.data == by_string.data == [{"_id": "pay1"}]

    @pytest.mark.asyncio
    async def test_get_by_status_rejects_unknown_status(self, http_client) -> None:
        with pytest.raises(ValueError):
            await PaymentClient(http_client).get_by_status("lost")

    @pytest.mark.asyncio
    async def test_update_status(self, http_client, backend) -> None:
        backend.add("PUT", "/api/v1/payment/pay1/status", envelope({"_id": "pay1", "status": "paid"}))

        payment = await PaymentClient(http_client).update_status("pay1", {"status": "paid"})

        assert payment["status"] == "paid"
        assert backend.json_body(backend.requests[-1]) == {"status": "paid"}

    @pytest.mark.asyncio
    async def test_create_vnpay_payment(self, http_client, backend) -> None:
        backend.add("POST", "/api/v1/payment/vnpay/create", envelope({"paymentUrl": "https://pay.example/x"}))

        result = await PaymentClient(http_client).create_vnpay_payment({"paymentId": "pay1"})

        assert result["paymentUrl"] == "https://pay.example/x"

    @pytest.mark.asyncio
    async def test_update_payment_method_by_ids_skips_failures(self, http_client, backend) -> None:
        backend.add("PUT", "/api/v1/payment/a", envelope({"_id": "a", "method": "cash"}))
        backend.add("PUT", "/api/v1/payment/c", envelope({"_id": "c", "method": "cash"}))

        updated = await PaymentClient(http_client).update_payment_method_by_ids(["a", "b", "c"], PaymentMethod.CASH)

        assert [payment["_id"] for payment in updated] == ["a", "c"]


class TestPrescriptionClient:
    @pytest.mark.asyncio
    async def test_update_payment_status(self, http_client, backend) -> None:
        backend.add("PUT", "/api/v1/prescription/rx1/payment", envelope({"_id": "rx1", "paymentStatus": "paid"}))

        result = await PrescriptionClient(http_client).update_payment_status("rx1", "paid")

        assert result["paymentStatus"] == "paid"
        assert backend.json_body(backend.requests[-1]) == {"paymentStatus": "paid"}


class TestBlogClient:
    """Tests for BlogClient."""

    @pytest.mark.asyncio
    async def test_get_all_blogs_active_keeps_envelope(self, http_client, backend) -> None:
        backend.add("GET", "/api/v1/blog/active", envelope([{"_id": "b1"}], msg="Active blogs"))

        response = await BlogClient(http_client).get_all_blogs_active()

        assert response.msg == "Active blogs"
        assert response.data == [{"_id": "b1"}]

    @pytest.mark.asyncio
    async def test_toggle_status(self, http_client, backend) -> None:
        backend.add("PATCH", "/api/v1/blog/b1/toggle", envelope({"_id": "b1", "isActive": False}))

        blog = await BlogClient(http_client).toggle_status("b1")

        assert blog["isActive"] is False

    @pytest.mark.asyncio
    async def test_latest_posts_swallow_errors(self, http_client, backend) -> None:
        backend.add("GET", "/api/v1/blog/active", {"message": "boom"}, status_code=500)

        assert await BlogClient(http_client).get_latest_blog_posts() == []

    @pytest.mark.asyncio
    async def test_latest_posts_send_limit(self, http_client, backend) -> None:
        backend.add("GET", "/api/v1/blog/active", envelope([{"_id": "b1"}]))

        posts = await BlogClient(http_client).get_latest_blog_posts(limit=1)

        assert posts == [{"_id": "b1"}]
        assert backend.requests[-1].url.params["limit"] == "1"


class TestIcdClient:
    """Tests for IcdClient."""

    @pytest.mark.asyncio
    async def test_get_by_ids_with_no_ids_makes_no_request(self, http_client, backend) -> None:
        assert await IcdClient(http_client).get_by_ids([]) == []
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_get_by_ids_joins_ids(self, http_client, backend) -> None:
        backend.add("GET", "/api/v1/icd/many", envelope([{"code": "A00"}, {"code": "B01"}]))

        entries = await IcdClient(http_client).get_by_ids(["A00", "B01"])

        assert len(entries) == 2
        assert backend.requests[-1].url.params["ids"] == "A00,B01"

    @pytest.mark.asyncio
    async def test_search_posts_query_params(self, http_client, backend) -> None:
        backend.add("POST", "/api/v1/icd/search", envelope(paginated([{"code": "J45"}])))

        page = await IcdClient(http_client).search("asthma", page=1, limit=5)

        assert page.data == [{"code": "J45"}]
        assert backend.requests[-1].url.params["q"] == "asthma"


class TestMedicineClient:
    """Tests for MedicineClient."""

    @pytest.mark.asyncio
    async def test_get_with_filters_ignores_unknown_keys(self, http_client, backend) -> None:
        backend.add("GET", "/api/v1/medicines", envelope(paginated([{"name": "Paracetamol"}])))

        await MedicineClient(http_client).get_with_filters({"name": "Para", "form": "", "color": "red"})

        params = backend.requests[-1].url.params
        assert params["name"] == "Para"
        assert "form" not in params
        assert "color" not in params

    @pytest.mark.asyncio
    async def test_bulk_update_body(self, http_client, backend) -> None:
        backend.add("PUT", "/api/v1/medicines/bulk", envelope([{"_id": "m1"}]))

        await MedicineClient(http_client).bulk_update([("m1", {"dosage": "500mg"})])

        assert backend.json_body(backend.requests[-1]) == {"updates": [{"id": "m1", "data": {"dosage": "500mg"}}]}

    @pytest.mark.asyncio
    async def test_bulk_delete_sends_ids_in_body(self, http_client, backend) -> None:
        backend.add("DELETE", "/api/v1/medicines/bulk", envelope({"message": "Deleted", "deletedCount": 2}))

        result = await MedicineClient(http_client).bulk_delete(["m1", "m2"])

        assert result["deletedCount"] == 2
        assert backend.json_body(backend.requests[-1]) == {"ids": ["m1", "m2"]}


class TestScheduleClient:
    """Tests for ScheduleClient."""

    def test_week_period_starts_on_sunday(self) -> None:
        # Wednesday
        period = ScheduleClient.get_week_period(datetime(2024, 5, 15, 14, 30))

        assert period.start == datetime(2024, 5, 12, 0, 0)
        assert period.end == datetime(2024, 5, 18, 23, 59, 59, 999000)

    def test_week_period_on_sunday_keeps_timezone(self) -> None:
        period = ScheduleClient.get_week_period(datetime(2024, 5, 12, 8, 0, tzinfo=timezone.utc))

        assert period.start == datetime(2024, 5, 12, tzinfo=timezone.utc)
        assert period.end.tzinfo is timezone.utc

    def test_day_offset(self) -> None:
        assert ScheduleClient.get_day_offset(datetime(2024, 5, 12)) == 0
        assert ScheduleClient.get_day_offset(datetime(2024, 5, 18)) == 6

    @pytest.mark.asyncio
    async def test_cancel_schedule(self, http_client, backend) -> None:
        backend.add("PATCH", "/api/v1/schedule/s1", envelope({"_id": "s1", "status": "cancelled"}))

        await ScheduleClient(http_client).cancel_schedule("s1")

        assert backend.json_body(backend.requests[-1]) == {"status": "cancelled"}

    @pytest.mark.asyncio
    async def test_get_by_specialization_without_filter(self, http_client, backend) -> None:
        backend.add("GET", "/api/v1/schedule/by-specialization", envelope([]))

        assert await ScheduleClient(http_client).get_by_specialization() == []
        assert "specialization" not in backend.requests[-1].url.params


class TestSpecialtyClient:
    @pytest.mark.asyncio
    async def test_detail_helpers(self, http_client, backend) -> None:
        detail = {"specialty": {"_id": "sp1", "name": "Cardiology"}, "blogs": [{"_id": "b1"}]}
        backend.add("GET", "/api/v1/specialties/sp1", envelope(detail))
        specialties = SpecialtyClient(http_client)

        assert (await specialties.get_specialty_only("sp1"))["name"] == "Cardiology"
        assert await specialties.get_blogs_by_specialty_id("sp1") == [{"_id": "b1"}]

    @pytest.mark.asyncio
    async def test_get_all_unwraps_twice(self, http_client, backend) -> None:
        backend.add("GET", "/api/v1/specialties", envelope(paginated([{"_id": "sp1"}])))

        assert await SpecialtyClient(http_client).get_all() == [{"_id": "sp1"}]


class TestPromotionClient:
    @pytest.mark.asyncio
    async def test_get_active_promotions(self, http_client, backend) -> None:
        backend.add("GET", "/api/v1/promotion/active", envelope([{"_id": "promo1"}]))

        assert await PromotionClient(http_client).get_active_promotions() == [{"_id": "promo1"}]


class TestUserClient:
    @pytest.mark.asyncio
    async def test_update_profile_uses_patch_on_base(self, http_client, backend) -> None:
        backend.add("PATCH", "/api/v1/user", envelope({"_id": "u1", "name": "An"}))

        profile = await UserClient(http_client).update_profile({"name": "An"})

        assert profile["name"] == "An"

    @pytest.mark.asyncio
    async def test_get_profile_with_response(self, http_client, backend) -> None:
        backend.add("GET", "/api/v1/user/profile", envelope({"_id": "u1"}, msg="Profile"))

        response = await UserClient(http_client).get_profile_with_response()

        assert response.msg == "Profile"


class TestMedicalExaminationClient:
    """Tests for MedicalExaminationClient."""

    @pytest.mark.asyncio
    async def test_get_by_diagnosis_code_builds_options(self, http_client, backend) -> None:
        backend.add("GET", "/api/v1/medical-examinations", envelope(paginated([{"_id": "e1"}])))

        await MedicalExaminationClient(http_client).get_by_diagnosis_code("I10", page=2)

        options = json.loads(backend.requests[-1].url.params["options"])
        assert options["filter"] == {"finalDiagnosis.icdCode": "I10"}
        assert options["pagination"] == {"page": 2, "limit": 10}
        assert options["sort"] == {"createdAt": -1}

    @pytest.mark.asyncio
    async def test_get_with_services_sends_boolean_string(self, http_client, backend) -> None:
        backend.add("GET", "/api/v1/medical-examinations", envelope(paginated([])))

        await MedicalExaminationClient(http_client).get_with_services(has_services=False)

        assert backend.requests[-1].url.params["hasServices"] == "false"

    @pytest.mark.asyncio
    async def test_get_by_date_range_uses_camel_case(self, http_client, backend) -> None:
        backend.add("GET", "/api/v1/medical-examinations", envelope(paginated([])))

        await MedicalExaminationClient(http_client).get_by_date_range("2024-01-01", "2024-01-31")

        params = backend.requests[-1].url.params
        assert params["startDate"] == "2024-01-01"
        assert params["endDate"] == "2024-01-31"


class TestImageClient:
    """Tests for ImageClient."""

    @pytest.mark.asyncio
    async def test_upload_image_sends_multipart(self, http_client, backend) -> None:
        captured = {}

        def upload(request: httpx.Request) -> httpx.Response:
            captured["content_type"] = request.headers["Content-Type"]
            captured["body"] = request.read()
            return httpx.Response(200, json=envelope({"url": "https://cdn.example/a.jpg"}))

        backend.add_handler("POST", "/api/v1/image", upload)

        result = await ImageClient(http_client).upload_image(
            "a.jpg", b"\xff\xd8\xff", options=ImageUploadOptions(category="avatar", resize=True)
        )

        assert result["url"] == "https://cdn.example/a.jpg"
        assert captured["content_type"].startswith("multipart/form-data")
        assert b'name="image"; filename="a.jpg"' in captured["body"]
        assert b'name="category"' in captured["body"]

    def test_upload_options_form_data(self) -> None:
        options = ImageUploadOptions(category="blog", resize=False, max_width=800)
        assert options.to_form_data() == {"category": "blog", "resize": "false", "maxWidth": "800"}


class TestScheduleCreate:
    @pytest.mark.asyncio
    async def test_create_sends_datetime_as_iso_string(self, http_client, backend) -> None:
        backend.add("POST", "/api/v1/schedule", envelope({"_id": "s1"}))

        await ScheduleClient(http_client).create({"date": datetime(2025, 1, 5, 9, 0), "patient": "u1"})

        assert backend.json_body(backend.requests[-1]) == {"date": "2025-01-05T09:00:00", "patient": "u1"}


class TestWaitingMessageClient:
    """Tests for WaitingMessageClient."""

    @pytest.mark.asyncio
    async def test_get_user_messages_unwraps_twice(self, http_client, backend) -> None:
        backend.add("GET", "/api/v1/waiting-message/user", envelope(paginated([{"_id": "w1"}])))

        messages = await WaitingMessageClient(http_client).get_user_messages()

        assert messages == [{"_id": "w1"}]

    @pytest.mark.asyncio
    async def test_get_user_messages_with_pagination(self, http_client, backend) -> None:
        backend.add("GET", "/api/v1/waiting-message/user", envelope(paginated([{"_id": "w1"}], total=12)))

        page = await WaitingMessageClient(http_client).get_user_messages_with_pagination()

        assert page.pagination.total == 12
        assert page.pagination.total_pages == 2

    @pytest.mark.asyncio
    async def test_update_status_uses_patch(self, http_client, backend) -> None:
        backend.add("PATCH", "/api/v1/waiting-message/w1", envelope({"_id": "w1", "status": "sent"}))

        message = await WaitingMessageClient(http_client).update_status("w1", {"status": WaitingMessageStatus.SENT})

        assert message["status"] == "sent"
        assert backend.json_body(backend.requests[-1]) == {"status": "sent"}

    @pytest.mark.asyncio
    async def test_get_many_messages_returns_raw_body(self, http_client, backend) -> None:
        body = {"status": "success", "data": {"docs": [{"_id": "w1"}], "totalDocs": 1, "page": 1}}
        backend.add("GET", "/api/v1/waiting-message/many", body)

        result = await WaitingMessageClient(http_client).get_many_messages(QueryOptions(sort={"triggerAt": 1}))

        assert result == body
        assert json.loads(backend.requests[-1].url.params["options"]) == {"sort": {"triggerAt": 1}}

    @pytest.mark.asyncio
    async def test_filter_helpers_send_flat_params(self, http_client, backend) -> None:
        backend.add("GET", "/api/v1/waiting-message/many", {"status": "success", "data": {"docs": []}})
        messages = WaitingMessageClient(http_client)

        await messages.get_by_status("failed", {"limit": 5})
        await messages.get_by_user_id("u1")
        await messages.get_by_date_range("2025-01-01", "2025-01-31")

        by_status, by_user, by_range = (request.url.params for request in backend.requests)
        assert by_status["status"] == "failed"
        assert by_status["limit"] == "5"
        assert by_user["userId"] == "u1"
        assert by_range["triggerAtFrom"] == "2025-01-01"
        assert by_range["triggerAtTo"] == "2025-01-31"

    @pytest.mark.asyncio
    async def test_get_by_status_rejects_unknown_status(self, http_client) -> None:
        with pytest.raises(ValueError):
            await WaitingMessageClient(http_client).get_by_status("queued")


class TestWeeklyPackageClient:
    @pytest.mark.asyncio
    async def test_get_all_and_detail(self, http_client, backend) -> None:
        backend.add("GET", "/api/v1/package-week", envelope([{"_id": "wk1"}]))
        backend.add("GET", "/api/v1/package-week/wk1/details", envelope({"_id": "wk1", "packageDays": [{"_id": "d1"}]}))
        packages = WeeklyPackageClient(http_client)

        assert await packages.get_all() == [{"_id": "wk1"}]
        detail = await packages.get_detail_by_id("wk1")

        assert detail["packageDays"] == [{"_id": "d1"}]

    @pytest.mark.asyncio
    async def test_get_detail_rejects_empty_id(self, http_client, backend) -> None:
        with pytest.raises(ValueError):
            await WeeklyPackageClient(http_client).get_detail_by_id("")
        assert backend.requests == []


class TestMedicationClient:
    """Tests for MedicationClient."""

    @pytest.mark.asyncio
    async def test_get_by_quantity_range(self, http_client, backend) -> None:
        backend.add("GET", "/api/v1/medications", envelope(paginated([{"_id": "md1", "quantity": 3}])))

        page = await MedicationClient(http_client).get_by_quantity_range(2, 5, {"page": 1})

        params = backend.requests[-1].url.params
        assert params["minQuantity"] == "2"
        assert params["maxQuantity"] == "5"
        assert params["page"] == "1"
        assert page.data[0]["quantity"] == 3

    @pytest.mark.asyncio
    async def test_get_with_filters_and_options(self, http_client, backend) -> None:
        backend.add("GET", "/api/v1/medications", envelope(paginated([])))

        await MedicationClient(http_client).get_with_filters(
            {"medicine": "m1", "frequency": "", "route": "oral"},
            QueryOptions(filter={"quantity": {"$gte": 2}}),
        )

        params = backend.requests[-1].url.params
        assert params["medicine"] == "m1"
        assert "frequency" not in params
        assert "route" not in params
        assert json.loads(params["options"]) == {"filter": {"quantity": {"$gte": 2}}}

    @pytest.mark.asyncio
    async def test_bulk_create_body(self, http_client, backend) -> None:
        backend.add("POST", "/api/v1/medications/bulk", envelope([{"_id": "md1"}]))

        created = await MedicationClient(http_client).bulk_create(
            [{"medicine": "m1", "quantity": 2, "frequency": "2x/day", "duration": "5 days"}]
        )

        assert created == [{"_id": "md1"}]
        body = backend.json_body(backend.requests[-1])
        assert body["medications"][0]["medicine"] == "m1"

    @pytest.mark.asyncio
    async def test_bulk_update_and_delete(self, http_client, backend) -> None:
        backend.add("PUT", "/api/v1/medications/bulk", envelope([{"_id": "md1"}]))
        backend.add("DELETE", "/api/v1/medications/bulk", envelope({"message": "Deleted", "deletedCount": 1}))
        medications = MedicationClient(http_client)

        await medications.bulk_update([("md1", {"quantity": 4})])
        result = await medications.bulk_delete(["md1"])

        assert backend.json_body(backend.requests[0]) == {"updates": [{"id": "md1", "data": {"quantity": 4}}]}
        assert backend.json_body(backend.requests[1]) == {"ids": ["md1"]}
        assert result["deletedCount"] == 1
