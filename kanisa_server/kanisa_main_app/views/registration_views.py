import logging

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from ..serializers import (
    AccountSerializer,
    RegisterStep1Serializer, RegisterStep2Serializer, RegisterStep3Serializer,
    RegisterStep4Serializer, RegisterStep5Serializer, ResendOtpSerializer,
)
from ..services import RegistrationService

logger = logging.getLogger(__name__)


class RegistrationViewSet(viewsets.ViewSet):
    """Public onboarding endpoints, one action per registration step"""

    permission_classes = [AllowAny]
    authentication_classes = []
    parser_classes = [JSONParser, FormParser, MultiPartParser]

    def get_service(self):
        return RegistrationService()

    def _validated(self, serializer_class, request):
        serializer = serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data

    @action(detail=False, methods=['post'], url_path='step-1')
    def step_1(self, request):
        data = self._validated(RegisterStep1Serializer, request)
        result = self.get_service().register_step1(
            full_name=data['full_name'],
            password=data['password'],
            email=data.get('email'),
            phone=data.get('phone'),
        )
        return Response(result, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['post'], url_path='step-2')
    def step_2(self, request):
        data = self._validated(RegisterStep2Serializer, request)
        result = self.get_service().register_step2(
            user_id=data['user_id'],
            otp=data['otp'],
            email=data.get('email'),
            phone=data.get('phone'),
        )
        result['user'] = AccountSerializer(result['user']).data
        return Response(result, status=status.HTTP_200_OK)

    @action(detail=False, methods=['post'], url_path='step-3')
    def step_3(self, request):
        data = self._validated(RegisterStep3Serializer, request)
        result = self.get_service().register_step3(
            user_id=data['user_id'],
            date_of_birth=data['date_of_birth'],
            tax_id=data['tax_id'],
            national_id=data['national_id'],
            email=data.get('email'),
            phone=data.get('phone'),
        )
        return Response(result, status=status.HTTP_200_OK)

    @action(detail=False, methods=['post'], url_path='step-4')
    def step_4(self, request):
        data = self._validated(RegisterStep4Serializer, request)
        result = self.get_service().register_step4(
            user_id=data['user_id'],
            business_name=data['business_name'],
            business_registration_number=data['business_registration_number'],
            files=data.get('documents', []),
            document_types=data.get('document_types') or None,
        )
        return Response(result, status=status.HTTP_200_OK)

    @action(detail=False, methods=['post'], url_path='step-5')
    def step_5(self, request):
        data = self._validated(RegisterStep5Serializer, request)
        result = self.get_service().register_step5(**data)
        return Response(result, status=status.HTTP_200_OK)

    @action(detail=False, methods=['get'], url_path=r'status/(?P<user_id>[^/.]+)')
    def registration_status(self, request, user_id=None):
        result = self.get_service().get_registration_status(user_id)
        result['user'] = AccountSerializer(result['user']).data
        return Response(result, status=status.HTTP_200_OK)

    @action(detail=False, methods=['post'], url_path='resend-otp')
    def resend_otp(self, request):
        data = self._validated(ResendOtpSerializer, request)
        result = self.get_service().resend_otp(
            user_id=data['user_id'],
            purpose=data['purpose'],
            email=data.get('email'),
            phone=data.get('phone'),
        )
        return Response(result, status=status.HTTP_200_OK)
