from rest_framework import serializers
from .models import User


class UserSummarySerializer(serializers.ModelSerializer):
    """Public profile summary joined into offer and payment listings."""

    displayName = serializers.CharField(source='get_display_name', read_only=True)
    firstName = serializers.CharField(source='first_name', read_only=True)
    lastName = serializers.CharField(source='last_name', read_only=True)
    profileImageUrl = serializers.CharField(source='profile_image_url', read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'displayName',
            'firstName',
            'lastName',
            'username',
            'phone',
            'profileImageUrl',
            'city',
            'rating',
        ]
        read_only_fields = fields
