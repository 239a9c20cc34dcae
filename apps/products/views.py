from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.permissions import IsAdminOrModerator
from .serializers import (
    ProductSerializer,
    PurchasedProductSerializer,
    ProductCreateSerializer,
    ProductUpdateSerializer,
    RatingInputSerializer,
    ProductListQuerySerializer,
)
from .services import (
    get_or_refresh_product,
    list_products,
    create_product,
    update_product,
    delete_product,
    search_products_by_name,
    rate_product,
    list_purchased_products,
)


class ProductViewSet(viewsets.ViewSet):
    """
    Catalog endpoints, keyed by scan code.

    list: Page through the catalog, or search by name with ?query=
    create: Add a product by hand (admin/moderator)
    retrieve: Resolve a scan code, fetching it from the catalog source if unknown
    update: Edit a product (admin/moderator)
    destroy: Delete a product (admin/moderator)
    """

    lookup_field = 'scan_code'
    serializer_class = ProductSerializer

    def get_permissions(self):
        if self.action in ['create', 'update', 'destroy']:
            return [IsAuthenticated(), IsAdminOrModerator()]
        return [IsAuthenticated()]

    @extend_schema(
        parameters=[
            ProductListQuerySerializer,
            OpenApiParameter('query', str, description='Case-insensitive name search; 404 when nothing matches'),
        ],
        responses={200: ProductSerializer(many=True)},
    )
    def list(self, request):
        if 'query' in request.query_params:
            products = search_products_by_name(query=request.query_params['query'])
            return Response(ProductSerializer(products.prefetch_related('ratings__user'), many=True).data)

        params = ProductListQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        products = list_products(**params.validated_data)
        return Response(ProductSerializer(products, many=True).data)

    @extend_schema(request=ProductCreateSerializer, responses={201: ProductSerializer})
    def create(self, request):
        serializer = ProductCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = create_product(**serializer.validated_data)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: ProductSerializer})
    def retrieve(self, request, scan_code=None):
        product = get_or_refresh_product(scan_code=scan_code)
        return Response(ProductSerializer(product).data)

    @extend_schema(request=ProductUpdateSerializer, responses={200: ProductSerializer})
    def update(self, request, scan_code=None):
        serializer = ProductUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        product = update_product(scan_code=scan_code, data=serializer.validated_data)
        return Response(ProductSerializer(product).data)

    def destroy(self, request, scan_code=None):
        delete_product(scan_code=scan_code)
        return Response({'message': 'Product deleted successfully'})

    @extend_schema(responses={200: PurchasedProductSerializer(many=True)})
    @action(detail=False, methods=['get'])
    def bought(self, request):
        """Products on the caller's invoices, each with the caller's rating."""
        products = list_purchased_products(user=request.user).prefetch_related('ratings__user')
        return Response(PurchasedProductSerializer(products, many=True).data)

    @extend_schema(request=RatingInputSerializer, responses={200: ProductSerializer})
    @action(detail=True, methods=['put'])
    def rating(self, request, scan_code=None):
        """Create or replace the caller's rating."""
        serializer = RatingInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = rate_product(scan_code=scan_code, user=request.user, **serializer.validated_data)
        return Response(ProductSerializer(product).data)
