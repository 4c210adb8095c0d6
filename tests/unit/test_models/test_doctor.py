"""Unit tests for the doctor and analytics models."""
from careforme.models.analytics import DirectorySummary, GroupCount, MonthlyCount
from careforme.models.doctor import DoctorRecord, FIELD_MAP
from careforme.models.session import Session


class TestDoctorRecord:
    """Test DoctorRecord model."""

    def test_defaults(self):
        """Test a bare record carries every default."""
        record = DoctorRecord()

        assert record.id is None
        assert record.name == ""
        assert record.rating == 0.0
        assert record.review_count == 0
        assert record.available_days == []
        assert record.is_available is True
        assert record.suspended is False

    def test_status_suspension_takes_precedence(self):
        """Test suspended records report Suspended regardless of availability."""
        assert DoctorRecord(suspended=True, is_available=True).status == "Suspended"
        assert DoctorRecord(suspended=True, is_available=False).status == "Suspended"
        assert DoctorRecord(is_available=True).status == "Available"
        assert DoctorRecord(is_available=False).status == "Unavailable"

    def test_is_active(self):
        assert DoctorRecord().is_active is True
        assert DoctorRecord(suspended=True).is_active is False
        assert DoctorRecord(is_available=False).is_active is False

    def test_to_dict_uses_store_keys(self):
        """Test converting a record to the stored document shape."""
        record = DoctorRecord(
            id="doc1",
            name="Dr. Sarah Johnson",
            review_count=12,
            available_days=["Monday"],
            profile_picture="https://example.com/p.jpg"
        )

        result = record.to_dict()

        assert set(result) == set(FIELD_MAP)
        assert "id" not in result
        assert result["reviewCount"] == 12
        assert result["profilePicture"] == "https://example.com/p.jpg"
        assert result["availableDays"] == ["Monday"]

    def test_to_dict_copies_weekdays(self):
        record = DoctorRecord(available_days=["Monday"])

        record.to_dict()["availableDays"].append("Friday")

        assert record.available_days == ["Monday"]

    def test_to_api_dict(self):
        """Test the API shape includes id and derived status."""
        result = DoctorRecord(id="doc1", suspended=True).to_api_dict()

        assert result["id"] == "doc1"
        assert result["status"] == "Suspended"
        assert result["suspended"] is True


class TestAnalyticsModels:
    """Test analytics value objects."""

    def test_group_count_to_dict(self):
        assert GroupCount("Cardiology", 3).to_dict() == {"name": "Cardiology", "value": 3}

    def test_monthly_count_to_dict(self):
        assert MonthlyCount("Mar", 2).to_dict() == {"name": "Mar", "value": 2}

    def test_summary_rounds_average(self):
        summary = DirectorySummary(
            total=3, active=1, unavailable=1, suspended=1,
            average_rating=4.7666, total_reviews=10,
            specialty_count=2, city_count=3
        )

        result = summary.to_dict()

        assert result["averageRating"] == 4.8
        assert result["topRatedDoctor"] is None
        assert result["totalDoctors"] == 3

    def test_summary_empty_average_is_none(self):
        summary = DirectorySummary(0, 0, 0, 0, None, 0, 0, 0)

        assert summary.to_dict()["averageRating"] is None


class TestSession:
    """Test Session model."""

    def test_to_dict_omits_missing_tokens(self):
        assert Session(uid="u1", email="a@b.com").to_dict() == {"uid": "u1", "email": "a@b.com"}

    def test_to_dict_with_tokens(self):
        session = Session(uid="u1", email="a@b.com", id_token="t", refresh_token="r", expires_in=3600)

        result = session.to_dict()

        assert result["idToken"] == "t"
        assert result["refreshToken"] == "r"
        assert result["expiresIn"] == 3600
