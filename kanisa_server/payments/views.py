import logging

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.authentication import JWTAuthentication

from kanisa_main_app.exceptions import ForbiddenError, UnauthorizedError, ValidationError
from kanisa_main_app.permissions import IsAdminRole
from .serializers import (
    PaymentSerializer, CreatePaymentSerializer, ManualPaymentSerializer, WebhookPayloadSerializer,
)
from .services import PaymentService

logger = logging.getLogger(__name__)


class PaymentViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]
    authentication_classes = [JWTAuthentication]

    def get_service(self):
        return PaymentService()

    def _check_owner(self, request, user_id):
        if str(user_id) != str(request.user.id) and not IsAdminRole().has_permission(request, self):
            raise ForbiddenError('You can only create payments for your own account')

    @action(detail=False, methods=['get'], url_path='status', permission_classes=[AllowAny], authentication_classes=[])
    def service_status(self, request):
        return Response(self.get_service().get_service_status(), status=status.HTTP_200_OK)

    @action(detail=False, methods=['post'], url_path='create')
    def create_payment(self, request):
        serializer = CreatePaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        user_id = data.get('user_id') or request.user.id
        self._check_owner(request, user_id)

        result = self.get_service().create_user_payment(user_id, data['amount'])
        return Response(result, status=status.HTTP_200_OK)

    @action(detail=False, methods=['post'], url_path='test')
    def test_payment(self, request):
        serializer = ManualPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user_id = serializer.validated_data.get('user_id')
        if user_id:
            self._check_owner(request, user_id)

        result = self.get_service().create_manual_payment(**serializer.validated_data)
        return Response(result, status=status.HTTP_200_OK)

    @action(detail=False, methods=['get'], url_path='order-status')
    def order_status(self, request):
        order_id = request.query_params.get('order_id')
        if not order_id:
            raise ValidationError('order_id query parameter is required', code='order_id_required')

        return Response(self.get_service().check_order_status(order_id), status=status.HTTP_200_OK)

    @action(detail=False, methods=['get'], url_path=r'order/(?P<order_id>[^/]+)')
    def order_detail(self, request, order_id=None):
        payment = self.get_service().get_payment_by_order_id(order_id)
        return Response({'status': 'success', 'data': PaymentSerializer(payment).data}, status=status.HTTP_200_OK)

    @action(detail=False, methods=['get'], url_path='list', permission_classes=[IsAuthenticated, IsAdminRole])
    def list_payments(self, request):
        try:
            limit = int(request.query_params.get('limit', 50))
            offset = int(request.query_params.get('offset', 0))
        except ValueError:
            raise ValidationError('limit and offset must be integers', code='invalid_pagination')

        payments = self.get_service().list_payments(limit=limit, offset=offset)
        return Response({
            'status': 'success',
            'data': PaymentSerializer(payments, many=True).data,
            'pagination': {'limit': limit, 'offset': offset, 'count': len(payments)},
        }, status=status.HTTP_200_OK)

    @action(detail=False, methods=['post'], url_path='sync-pending', permission_classes=[IsAuthenticated, IsAdminRole])
    def sync_pending(self, request):
        logger.info('[PAYMENT SYNC] Manual sync of pending payments triggered')
        result = self.get_service().sync_pending_payments()
        return Response({
            'status': 'success',
            'message': 'Pending payments sync completed',
            **result,
        }, status=status.HTTP_200_OK)

    @action(detail=False, methods=['post'], url_path='webhook', permission_classes=[AllowAny], authentication_classes=[])
    def webhook(self, request):
        service = self.get_service()
        service.ensure_configured()

        if not service.verify_webhook(request.headers.get('x-api-key')):
            logger.warning('[WEBHOOK] Rejected request with an invalid API key')
            raise UnauthorizedError('Invalid API Key', code='invalid_api_key')

        serializer = WebhookPayloadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        service.process_webhook(
            order_id=data['order_id'],
            payment_status=data['payment_status'],
            reference=data.get('reference'),
            metadata=data.get('metadata'),
        )
        return Response({'status': 'success', 'message': 'Webhook processed successfully'}, status=status.HTTP_200_OK)
