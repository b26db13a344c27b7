import logging

from django.db import transaction
from django.shortcuts import get_object_or_404
from rest_framework import status, permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from product.models import Product
from storefront.exceptions import InsufficientStock, NotFound
from .models import Cart, CartItem
from .serializers import CartSerializer, CartItemSerializer, AddToCartSerializer, UpdateCartItemSerializer

logger = logging.getLogger(__name__)


def _cart_queryset():
    return Cart.objects.prefetch_related("items__product")


class CartAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, format=None):
        # carts are created lazily on first access
        Cart.objects.get_or_create(user=request.user)
        cart = _cart_queryset().get(user=request.user)
        return Response(CartSerializer(cart, context={"request": request}).data, status=status.HTTP_200_OK)


class AddToCartAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, format=None):
        """
        Expected payload:
        {
            "productId": <id>,
            "quantity": <int>   # default 1
        }
        """
        serializer = AddToCartSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product_id = serializer.validated_data["productId"]
        qty = serializer.validated_data["quantity"]

        product = get_object_or_404(Product, pk=product_id)
        if product.stock < qty:
            raise InsufficientStock(product.pk, product.name)

        with transaction.atomic():
            cart, _ = Cart.objects.get_or_create(user=request.user)
            item, created = CartItem.objects.select_for_update().get_or_create(
                cart=cart,
                product=product,
                defaults={"quantity": qty},
            )

            if not created:
                # Add to existing quantity
                new_quantity = item.quantity + qty
                if product.stock < new_quantity:
                    raise InsufficientStock(product.pk, product.name)
                item.quantity = new_quantity
                item.save(update_fields=["quantity"])

        logger.debug("Cart %s: product %s quantity now %s", cart.pk, product.pk, item.quantity)
        return Response(
            {
                "message": "Item added to cart" if created else "Item quantity updated",
                "item": CartItemSerializer(item, context={"request": request}).data,
            },
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )


class CartItemDetailAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get_object(self, request, pk):
        try:
            return CartItem.objects.select_related("product").get(pk=pk, cart__user=request.user)
        except CartItem.DoesNotExist:
            raise NotFound("Cart item not found", item_id=pk)

    def put(self, request, pk, format=None):
        """ Update quantity only. """
        item = self.get_object(request, pk)

        serializer = UpdateCartItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        qty = serializer.validated_data["quantity"]

        if item.product.stock < qty:
            raise InsufficientStock(item.product_id, item.product.name)

        item.quantity = qty
        item.save(update_fields=["quantity"])
        return Response(
            {"message": "Cart item updated", "item": CartItemSerializer(item, context={"request": request}).data},
            status=status.HTTP_200_OK,
        )

    def delete(self, request, pk, format=None):
        item = self.get_object(request, pk)
        item.delete()
        return Response({"message": "Item removed from cart"}, status=status.HTTP_200_OK)


class ClearCartAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def delete(self, request, format=None):
        cart = Cart.objects.filter(user=request.user).first()
        if cart is None:
            raise NotFound("Cart not found")

        CartItem.objects.filter(cart=cart).delete()
        return Response({"message": "Cart cleared successfully"}, status=status.HTTP_200_OK)
