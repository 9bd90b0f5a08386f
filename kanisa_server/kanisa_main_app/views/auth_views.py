from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.authentication import JWTAuthentication

from ..serializers import (
    AccountSerializer, LoginSerializer, PasswordResetRequestSerializer, PasswordResetConfirmSerializer,
)
from ..services import AuthService


class AuthViewSet(viewsets.ViewSet):

    permission_classes = [AllowAny]

    # public actions skip authentication; profile opts back in
    authentication_classes = []

    def get_service(self):
        return AuthService()

    @action(detail=False, methods=['post'], url_path='login')
    def login(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = self.get_service().login(data['password'], email=data.get('email'), phone=data.get('phone'))
        result['user'] = AccountSerializer(result['user']).data
        return Response(result, status=status.HTTP_200_OK)

    @action(
        detail=False, methods=['get'], url_path='profile',
        permission_classes=[IsAuthenticated], authentication_classes=[JWTAuthentication]
    )
    def profile(self, request):
        return Response(AccountSerializer(request.user).data, status=status.HTTP_200_OK)

    @action(detail=False, methods=['post'], url_path='password-reset/request')
    def password_reset_request(self, request):
        serializer = PasswordResetRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = self.get_service().request_password_reset(email=data.get('email'), phone=data.get('phone'))
        return Response(result, status=status.HTTP_200_OK)

    @action(detail=False, methods=['post'], url_path='password-reset/confirm')
    def password_reset_confirm(self, request):
        serializer = PasswordResetConfirmSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = self.get_service().reset_password(
            data['code'], data['new_password'], email=data.get('email'), phone=data.get('phone')
        )
        return Response(result, status=status.HTTP_200_OK)
