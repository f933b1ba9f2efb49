import re
from django import forms

from core.api import MAX_DB_ID
from .models import BLOOD_TYPE_CHOICES, BloodDonation, BloodRequest

PHONE_RE = re.compile(r"^[0-9+\-\s().]{7,30}$")

# PositiveIntegerField column limit
MAX_UNITS = 2147483647


class _GeoQueryForm(forms.Form):
    """
    Shared search facets. lat/lng travel together; zero is a real coordinate.
    """
    lat = forms.FloatField(required=False, min_value=-90, max_value=90)
    lng = forms.FloatField(required=False, min_value=-180, max_value=180)
    radius = forms.FloatField(required=False, min_value=1, max_value=100)
    district = forms.CharField(required=False, max_length=100)
    hospital_name = forms.CharField(required=False, max_length=200)

    def clean(self):
        cleaned = super().clean()
        lat = cleaned.get("lat")
        lng = cleaned.get("lng")

        # only judge the pair when both parsed; field errors are already reported
        if "lat" in cleaned and "lng" in cleaned and (lat is None) != (lng is None):
            missing = "lng" if lng is None else "lat"
            self.add_error(missing, "Latitude and longitude must be given together.")

        for key in ("district", "hospital_name"):
            cleaned[key] = (cleaned.get(key) or "").strip() or None

        return cleaned

    def search_kwargs(self):
        d = self.cleaned_data
        return {
            "lat": d.get("lat"),
            "lng": d.get("lng"),
            "radius": d.get("radius"),
            "district": d.get("district"),
            "hospital_name": d.get("hospital_name"),
        }


class FindBloodForm(_GeoQueryForm):
    blood_type = forms.ChoiceField(choices=BLOOD_TYPE_CHOICES)

    def search_kwargs(self):
        kwargs = super().search_kwargs()
        kwargs["blood_type"] = self.cleaned_data["blood_type"]
        return kwargs


class DonationCenterSearchForm(_GeoQueryForm):
    blood_type = forms.ChoiceField(choices=BLOOD_TYPE_CHOICES, required=False)

    def search_kwargs(self):
        kwargs = super().search_kwargs()
        kwargs["blood_type"] = self.cleaned_data.get("blood_type") or None
        return kwargs


class InventoryItemForm(forms.Form):
    blood_type = forms.ChoiceField(choices=BLOOD_TYPE_CHOICES)
    units_available = forms.IntegerField(min_value=0, max_value=MAX_UNITS, error_messages={
        "min_value": "Units must be non-negative.",
    })


class BloodDonationForm(forms.ModelForm):
    class Meta:
        model = BloodDonation
        fields = [
            "donor_name", "donor_phone", "donor_email",
            "blood_type", "units_donated", "donation_date", "notes",
        ]

    def clean_units_donated(self):
        u = self.cleaned_data.get("units_donated")
        if u is None or u < 1:
            raise forms.ValidationError("At least 1 unit is required.")
        if u > MAX_UNITS:
            raise forms.ValidationError("Too many units.")
        return u

    def clean_donor_phone(self):
        p = (self.cleaned_data.get("donor_phone") or "").strip()
        if p and not PHONE_RE.match(p):
            raise forms.ValidationError("Enter a valid phone number.")
        return p


class BloodRequestForm(forms.ModelForm):
    hospital_id = forms.IntegerField(min_value=1, max_value=MAX_DB_ID)

    class Meta:
        model = BloodRequest
        fields = [
            "requester_name", "requester_phone", "requester_email",
            "blood_type", "units_needed", "urgency", "notes",
        ]

    def clean_requester_name(self):
        n = (self.cleaned_data.get("requester_name") or "").strip()
        if not n:
            raise forms.ValidationError("Name is required.")
        return n

    def clean_requester_phone(self):
        p = (self.cleaned_data.get("requester_phone") or "").strip()
        if not PHONE_RE.match(p):
            raise forms.ValidationError("Enter a valid phone number.")
        return p

    def clean_units_needed(self):
        u = self.cleaned_data.get("units_needed")
        if u is None or u < 1:
            raise forms.ValidationError("At least 1 unit is required.")
        if u > MAX_UNITS:
            raise forms.ValidationError("Too many units.")
        return u


class RequestStatusForm(forms.Form):
    STATUS = [
        ("approved", "Approved"),
        ("fulfilled", "Fulfilled"),
        ("cancelled", "Cancelled"),
    ]
    status = forms.ChoiceField(choices=STATUS)
