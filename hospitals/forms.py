import re
from django import forms
from .models import Hospital

PHONE_RE = re.compile(r"^[0-9+\-\s().]{7,30}$")


class HospitalForm(forms.ModelForm):
    class Meta:
        model = Hospital
        fields = [
            "name", "address", "city", "state", "district", "zip_code",
            "phone", "email", "latitude", "longitude",
        ]

    def clean_name(self):
        n = (self.cleaned_data.get("name") or "").strip()
        if not n:
            raise forms.ValidationError("Hospital name is required.")
        return n

    def clean_phone(self):
        p = (self.cleaned_data.get("phone") or "").strip()
        if not PHONE_RE.match(p):
            raise forms.ValidationError("Enter a valid phone number.")
        return p

    def clean_district(self):
        return (self.cleaned_data.get("district") or "").strip()
