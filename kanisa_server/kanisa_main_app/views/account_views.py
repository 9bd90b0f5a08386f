from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.authentication import JWTAuthentication

from ..permissions import IsCustomer
from ..serializers import (
    AccountSerializer, BusinessProfileSerializer, AccountUpdateSerializer, BusinessUpdateSerializer,
    UserSettingsSerializer, SettingsUpdateSerializer,
)
from ..services import AccountService


class AccountViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]
    authentication_classes = [JWTAuthentication]

    def get_service(self):
        return AccountService()

    @action(detail=False, methods=['get', 'patch'], url_path='account')
    def account(self, request):
        if request.method == 'GET':
            return Response(AccountSerializer(request.user).data, status=status.HTTP_200_OK)

        serializer = AccountUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        result = self.get_service().update_account(request.user, **serializer.validated_data)
        result['user'] = AccountSerializer(result['user']).data
        return Response(result, status=status.HTTP_200_OK)

    @action(
        detail=False, methods=['get', 'patch'], url_path='business',
        permission_classes=[IsAuthenticated, IsCustomer]
    )
    def business(self, request):
        service = self.get_service()
        if request.method == 'GET':
            profile = service.get_business(request.user)
            return Response(BusinessProfileSerializer(profile).data, status=status.HTTP_200_OK)

        serializer = BusinessUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        result = service.update_business(request.user, **serializer.validated_data)
        result['business'] = BusinessProfileSerializer(result['business']).data
        return Response(result, status=status.HTTP_200_OK)

    # APIView already uses the name settings
    @action(detail=False, methods=['get', 'patch'], url_path='settings')
    def user_settings(self, request):
        service = self.get_service()
        if request.method == 'GET':
            return Response(UserSettingsSerializer(service.get_settings(request.user)).data, status=status.HTTP_200_OK)

        serializer = SettingsUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        result = service.update_settings(request.user, **serializer.validated_data)
        result['settings'] = UserSettingsSerializer(result['settings']).data
        return Response(result, status=status.HTTP_200_OK)

    @action(detail=False, methods=['get'], url_path='account/summary')
    def account_summary(self, request):
        summary = self.get_service().get_account_summary(request.user)
        business = summary['business']
        return Response({
            'account': AccountSerializer(summary['account']).data,
            'business': BusinessProfileSerializer(business).data if business else None,
            'settings': UserSettingsSerializer(summary['settings']).data,
        }, status=status.HTTP_200_OK)
