from django.core.management.base import BaseCommand
from meivendas.infrastructure.models import Categoria

# Uma categoria por linha do relatório mensal do MEI
CATEGORIAS_PADRAO = (
    'Revenda de Mercadorias',
    'Produtos Industrializados',
    'Prestação de Serviços',
)


class Command(BaseCommand):
    help = 'Carrega as categorias de venda padrão do MEI'

    def handle(self, *args, **kwargs):
        self.stdout.write('Criando categorias...')

        for nome in CATEGORIAS_PADRAO:
            categoria, created = Categoria.objects.get_or_create(
                nome=nome,
                defaults={'ativo': True},
            )
            if created:
                self.stdout.write(self.style.SUCCESS(f'Criada categoria "{categoria.nome}"'))
            else:
                self.stdout.write(f'Categoria "{categoria.nome}" já existe')

        self.stdout.write(self.style.SUCCESS('Categorias carregadas com sucesso!'))
