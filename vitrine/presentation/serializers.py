from rest_framework import serializers

from vitrine.core.order_status import STATUS_CHOICES


# ====================================================================
# SERIALIZERS PARA O CARRINHO
# ====================================================================

class CartLineSerializer(serializers.Serializer):
    """Representação de leitura de uma CartLine."""
    product_id = serializers.CharField()
    name = serializers.CharField()
    price = serializers.DecimalField(max_digits=12, decimal_places=2)
    image = serializers.CharField(allow_null=True)
    quantity = serializers.IntegerField()
    size = serializers.CharField(allow_null=True)
    color = serializers.CharField(allow_null=True)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)


class ItemCarrinhoSerializer(serializers.Serializer):
    """
    Identifica uma linha do carrinho (produto + variação).
    Usado diretamente na remoção.
    """
    product_id = serializers.CharField()
    size = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    color = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)


class AdicionarItemSerializer(ItemCarrinhoSerializer):
    quantity = serializers.IntegerField(min_value=1, default=1)


class AtualizarItemSerializer(ItemCarrinhoSerializer):
    # Quantidade zero ou negativa remove a linha.
    quantity = serializers.IntegerField()


# SERIALIZER PARA CHECKOUT
# ====================================================================
class CheckoutSerializer(serializers.Serializer):
    """
    Serializer para a validação dos dados de entrega e pagamento.
    Os nomes dos campos seguem o formato esperado pela API remota.
    """
    fullName = serializers.CharField(max_length=255)
    address = serializers.CharField(max_length=255)
    city = serializers.CharField(max_length=255)
    postalCode = serializers.CharField(max_length=20)
    country = serializers.CharField(max_length=100)
    phone = serializers.CharField(max_length=30)

    METODO_PAGAMENTO_CHOICES = [
        ('card', 'Cartão de Crédito'),
        ('paypal', 'PayPal'),
        ('cod', 'Pagamento na entrega'),
    ]
    paymentMethod = serializers.ChoiceField(choices=METODO_PAGAMENTO_CHOICES, default='card')

    def endereco(self) -> dict:
        return {
            campo: self.validated_data[campo]
            for campo in ('fullName', 'address', 'city', 'postalCode', 'country', 'phone')
        }


# ====================================================================
# SERIALIZERS DE AUTENTICAÇÃO
# ====================================================================

class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)


class RegistroSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(min_length=6, trim_whitespace=False)


# ====================================================================
# SERIALIZERS ADMINISTRATIVOS
# ====================================================================

class StatusPedidoSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=STATUS_CHOICES)


class ProdutoSerializer(serializers.Serializer):
    """Campos aceitos na criação/edição de produtos (repassados à API)."""
    name = serializers.CharField(max_length=255)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, coerce_to_string=False)
    description = serializers.CharField(required=False, allow_blank=True)
    image = serializers.CharField(required=False, allow_blank=True)
    brand = serializers.CharField(required=False, allow_blank=True)
    category = serializers.CharField(required=False, allow_blank=True)
    countInStock = serializers.IntegerField(required=False, min_value=0)
    featured = serializers.BooleanField(required=False)
    sizes = serializers.ListField(child=serializers.CharField(), required=False)
    colors = serializers.ListField(child=serializers.CharField(), required=False)

    def to_api(self) -> dict:
        dados = dict(self.validated_data)
        if 'price' in dados:
            dados['price'] = float(dados['price'])
        return dados


class UsuarioAdminSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150, required=False)
    email = serializers.EmailField(required=False)
    isAdmin = serializers.BooleanField(required=False)
