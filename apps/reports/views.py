from rest_framework import serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsAdminOrModerator
from .serializers import ReportSerializer, ReportHistoryQuerySerializer
from .services import generate_report, list_reports


class GenerateReportResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    report = ReportSerializer()


@extend_schema(
    responses={200: GenerateReportResponseSerializer},
    description="Rescan the invoice ledger and store a new sales snapshot.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminOrModerator])
def report(request):
    snapshot = generate_report()
    return Response({
        'message': 'Report generated successfully',
        'report': ReportSerializer(snapshot).data,
    })


@extend_schema(
    parameters=[ReportHistoryQuerySerializer],
    responses={200: ReportSerializer(many=True)},
    description="Previously generated snapshots, newest first.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminOrModerator])
def report_history(request):
    params = ReportHistoryQuerySerializer(data=request.query_params)
    params.is_valid(raise_exception=True)
    return Response(ReportSerializer(list_reports(**params.validated_data), many=True).data)
