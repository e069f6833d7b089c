# accounts/forms.py

from django import forms
from django.contrib.auth.forms import UserCreationForm
from .models import User


class SignupForm(UserCreationForm):
    class Meta(UserCreationForm.Meta):
        model = User
        fields = ('email', 'first_name', 'last_name')

    def clean_email(self):
        email = self.cleaned_data.get('email', '').lower()
        if User.objects.filter(email=email).exists():
            raise forms.ValidationError("An account with this email already exists.")
        return email


class LoginForm(forms.Form):
    email = forms.EmailField()
    password = forms.CharField(strip=False)


class UserUpdateForm(forms.ModelForm):
    password = forms.CharField(required=False, strip=False, min_length=8)

    class Meta:
        model = User
        fields = ['first_name', 'last_name', 'avatar']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Partial updates: anything left out keeps its current value
        for field in self.fields.values():
            field.required = False

    def clean(self):
        cleaned_data = super().clean()
        for name in ('first_name', 'last_name'):
            if not cleaned_data.get(name):
                cleaned_data[name] = getattr(self.instance, name)
        if not cleaned_data.get('avatar'):
            cleaned_data['avatar'] = self.instance.avatar
        return cleaned_data

    def save(self, commit=True):
        user = super().save(commit=False)
        if self.cleaned_data.get('password'):
            user.set_password(self.cleaned_data['password'])
        if commit:
            user.save()
        return user
