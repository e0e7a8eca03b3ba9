"""
Static OLX Brazil catalog: category slugs and region codes.
"""

from typing import Dict, List, Optional, Sequence

from olx_search.core.exceptions.base import UnknownCategoryError, UnknownRegionError

# friendly URL path -> display name
CATEGORIES: Dict[str, str] = {
    "imoveis": "Imóveis",
    "imoveis/venda": "Venda - casas e apartamentos",
    "imoveis/aluguel": "Aluguel - casas e apartamentos",
    "imoveis/temporada": "Temporada",
    "imoveis/terrenos": "Terrenos, sítios e fazendas",
    "imoveis/comercio-e-industria": "Comércio e indústria",
    "imoveis/lancamentos": "Imóvel Novo",
    "autos-e-pecas": "Autos",
    "autos-e-pecas/carros-vans-e-utilitarios": "Carros, vans e utilitários",
    "autos-e-pecas/motos": "Motos",
    "autos-e-pecas/onibus": "Ônibus",
    "autos-e-pecas/caminhoes": "Caminhões",
    "autos-e-pecas/barcos-e-aeronaves": "Barcos e aeronaves",
    "autos-e-pecas/pecas-e-acessorios": "Autopeças",
    "autos-e-pecas/pecas-e-acessorios/carros-vans-e-utilitarios": "Peças para carros, vans e utilitários",
    "autos-e-pecas/pecas-e-acessorios/motos": "Peças para motos",
    "autos-e-pecas/pecas-e-acessorios/onibus": "Peças para ônibus",
    "autos-e-pecas/pecas-e-acessorios/caminhoes": "Peças para caminhões",
    "autos-e-pecas/pecas-e-acessorios/barcos-e-aeronaves": "Peças para barcos e aeronaves",
    "para-a-sua-casa": "Casa, Decoração e Utensílios",
    "para-a-sua-casa/cama-mesa-e-banho": "Tecidos de Cama, Mesa e Banho",
    "para-a-sua-casa/decoracoes-para-casa": "Decorações Para Casa",
    "para-a-sua-casa/casa-inteligente": "Casa Inteligente",
    "para-a-sua-casa/utensilios-para-cozinha": "Utensílios Para Cozinha",
    "para-a-sua-casa/utensilios-para-banheiro-e-limpeza": "Utensílios Para Banheiro e Limpeza",
    "para-a-sua-casa/iluminacao": "Iluminação",
    "para-a-sua-casa/seguranca-residencial": "Segurança Residencial",
    "para-a-sua-casa/jardinagem-e-plantas": "Jardinagem e Plantas",
    "para-a-sua-casa/area-externa": "Área Externa",
    "moveis": "Móveis",
    "moveis/camas-e-colchoes": "Camas e Colchões",
    "moveis/sofas-e-poltronas": "Sofás e Poltronas",
    "moveis/cadeiras-de-escritorio-e-gamer": "Cadeiras de Escritório e Gamer",
    "moveis/bancos-e-cadeiras": "Bancos e Cadeiras",
    "moveis/mesas": "Mesas",
    "moveis/escrivaninhas-e-penteadeiras": "Escrivaninhas e Penteadeiras",
    "moveis/racks-e-paineis": "Racks e Painéis",
    "moveis/armarios-e-guarda-roupas": "Armários e Guarda-Roupas",
    "moveis/moveis-para-organizacao": "Móveis Para Organização",
    "eletro": "Eletro",
    "eletro/ar-condicionados": "Ar-condicionados",
    "eletro/ventiladores-e-climatizadores": "Ventiladores e Climatizadores",
    "eletro/geladeiras-e-freezers": "Geladeiras e Freezers",
    "eletro/fogoes-e-fornos": "Fogões e Fornos",
    "eletro/maquinas-de-lavar-e-secadoras": "Máquinas de Lavar e Secadoras",
    "eletro/eletroportateis-para-cozinha-e-limpeza": "Eletroportáteis Para Cozinha e Limpeza",
    "eletro/eletroportateis-para-cuidados-pessoais": "Eletroportáteis Para Cuidados Pessoais",
    "materiais-de-construcao": "Materiais de Construção",
    "materiais-de-construcao/fundacao-e-estrutura": "Fundação e Estrutura",
    "materiais-de-construcao/alvenaria": "Alvenaria",
    "materiais-de-construcao/pisos-e-revestimentos": "Pisos e Revestimentos",
    "materiais-de-construcao/portas-e-janelas": "Portas e Janelas",
    "materiais-de-construcao/cubas-e-pias": "Cubas e Pias",
    "materiais-de-construcao/torneiras-duchas-e-vasos": "Torneiras, Duchas e Vasos",
    "materiais-de-construcao/instalacoes-eletricas-e-hidraulicas": "Instalações Elétricas e Hidráulicas",
    "materiais-de-construcao/ferramentas-de-construcao": "Ferramentas de Construção",
    "materiais-de-construcao/ferramentas-de-pintura": "Ferramentas de Pintura",
    "eletronicos-e-celulares": "Celulares e Telefonia",
    "celulares": "Celulares e Smartphones",
    "eletronicos-e-celulares/acessorios-de-celular": "Acessórios de Celular",
    "eletronicos-e-celulares/pecas-de-celular": "Peças de Celular",
    "eletronicos-e-celulares/smartwatches": "Smartwatches",
    "eletronicos-e-celulares/acessorios-para-smartwatch": "Acessórios Para Smartwatch",
    "eletronicos-e-celulares/telefonia-fixa-e-sem-fio": "Telefonia Fixa e Sem Fio",
    "informatica": "Informática",
    "informatica/computadores-e-desktops": "Computadores e Desktops",
    "informatica/notebooks": "Notebooks",
    "informatica/monitores": "Monitores",
    "informatica/perifericos-e-acessorios-de-computador": "Periféricos e Acessórios de Computador",
    "informatica/pecas-de-hardware": "Peças de Hardware",
    "informatica/armazenamento": "Armazenamento",
    "informatica/memoria-ram": "Memória RAM",
    "informatica/processadores": "Processadores",
    "informatica/placas-de-video": "Placas de Vídeo",
    "informatica/conectividade-e-dispositivos-de-rede": "Conectividade e Dispositivos de Rede",
    "informatica/tablets-e-readers": "Tablets e E-Readers",
    "games": "Games",
    "games/consoles-de-video-game": "Consoles de Vídeo Game",
    "games/jogos-de-video-game": "Jogos de Vídeo Game",
    "games/acessorios-de-video-game": "Peças e Acessórios de Vídeo Game",
    "tvs-e-video": "TVs e video",
    "tvs-e-video/tvs": "TVs",
    "tvs-e-video/acessorios-para-tv": "Peças e Acessórios para TV",
    "tvs-e-video/projetores-e-telas-de-projecao": "Projetores e Telas de Projeção",
    "tvs-e-video/dvd-blu-ray-video-cassete": "DVD, Blu-Ray e Vídeo Cassete",
    "tvs-e-video/dispositivos-de-streaming": "Dispositivos de Streaming",
    "audio": "Áudio",
    "audio/fones-de-ouvido": "Fones de Ouvido",
    "audio/aparelhos-de-som": "Aparelhos de Som",
    "audio/microfones-e-gravadores": "Microfones e Gravadores",
    "audio/equipamentos-e-acessorios-de-som": "Equipamentos e Acessórios de Som",
    "cameras-e-drones": "Câmeras e Drones",
    "cameras-e-filmadoras": "Câmeras e Filmadoras",
    "acessorios-para-cameras-e-filmadoras": "Acessórios para Câmeras e Filmadoras",
    "drones": "Drones",
    "moda-e-beleza": "Moda e beleza",
    "beleza-e-saude": "Beleza e Cuidados Pessoais",
    "roupas": "Roupas",
    "bolsas-malas-e-mochilas": "Bolsas, malas e mochilas",
    "bijouteria-relogios-e-acessorios": "Acessórios",
    "calcados": "Calçados",
    "comercio-e-escritorio": "Comércio",
    "comercio-e-escritorio/equipamentos": "Equipamentos Para Comércio",
    "comercio-e-escritorio/gastronomia": "Gastronomia e Hotelaria",
    "comercio-e-escritorio/equipamento-medico": "Equipamentos Médicos e Hospitalares",
    "comercio-e-escritorio/uniformes-epis": "Uniformes de Trabalho e EPIs",
    "comercio-e-escritorio/trailers-e-carrinhos-comerciais": "Trailers e carrinhos comerciais",
    "escritorio": "Escritório e Home Office",
    "escritorio/itens-para-escritorio": "Itens Para Escritório",
    "escritorio/cadeiras-de-escritorio": "Cadeiras de Escritório e Gamer",
    "escritorio/moveis-de-escritorio": "Móveis de Escritório",
    "escritorio/papelaria": "Papelaria",
    "musica-e-hobbies": "Música e hobbies",
    "instrumentos-musicais": "Instrumentos musicais",
    "cds-dvds": "CDs, DVDs etc",
    "livros-e-revistas": "Livros e revistas",
    "antiguidades": "Antiguidades",
    "hobbies-e-colecoes": "Hobbies e coleções",
    "esportes-e-lazer": "Esportes e Fitness",
    "ciclismo": "Ciclismo",
    "esportes-e-lazer/academia-e-exercicios": "Academia e Exercícios",
    "esportes-e-lazer/acampamento": "Acampamento",
    "esportes-e-lazer/esportes-sobre-rodas": "Esportes Sobre Rodas",
    "esportes-e-lazer/quadra-e-ao-ar-livre": "Esportes de Quadra e Ao Ar Livre",
    "esportes-e-lazer/esportes-aquaticos": "Esportes Aquáticos",
    "esportes-e-lazer/roupas-esportivas": "Roupas Esportivas",
    "esportes-e-lazer/calcados-esportivos": "Calçados Esportivos",
    "esportes-e-lazer/acessorios-de-ciclismo": "Acessórios de Ciclismo",
    "artigos-infantis": "Artigos infantis",
    "artigos-infantis/roupas-infantis": "Roupas Infantis",
    "artigos-infantis/calcados-infantis": "Calçados Infantis",
    "artigos-infantis/roupas-para-bebes": "Roupas para Bebês",
    "artigos-infantis/calcados-para-bebes": "Calçados Para Bebês",
    "artigos-infantis/brinquedos": "Brinquedos e Jogos",
    "artigos-infantis/maternidade-e-bebes": "Maternidade e Cuidados com o Bebê",
    "artigos-infantis/moveis-infantis": "Móveis Infantis",
    "animais-de-estimacao": "Animais de estimação",
    "animais-de-estimacao/cachorros": "Cachorros",
    "animais-de-estimacao/gatos": "Gatos",
    "animais-de-estimacao/acessorios": "Acessórios para pets",
    "animais-de-estimacao/roedores": "Roedores",
    "animais-de-estimacao/outros-animais": "Outros animais",
    "agro-e-industria": "Agro e indústria",
    "agro-e-industria/tratores-e-maquinas-agricolas": "Tratores e máquinas agrícolas",
    "agro-e-industria/maquinas-pesadas-para-construcao": "Máquinas pesadas para construção",
    "agro-e-industria/maquinas-para-producao-industrial": "Máquinas para produção industrial",
    "agro-e-industria/pecas-para-tratores-e-maquinas": "Peças para tratores e máquinas",
    "agro-e-industria/animais-para-agropecuaria": "Animais para agropecuária",
    "agro-e-industria/producao-rural": "Produção Rural",
    "agro-e-industria/outros-itens-para-agro-e-industria": "Outros itens para agro e indústria",
    "servicos": "Serviços",
    "vagas-de-emprego": "Vagas de emprego",
}

# brazilian states plus the federal district
REGION_CODES = frozenset({
    "ac", "al", "ap", "am", "ba", "ce", "df", "es", "go", "ma", "mt", "ms", "mg", "pa",
    "pb", "pr", "pe", "pi", "rj", "rn", "rs", "ro", "rr", "sc", "sp", "se", "to",
})


def get_categories() -> List[Dict[str, str]]:
    """
    List the known categories.
    
    Returns:
        Entries like {"slug": "celulares", "name": "Celulares e Smartphones"}
    """
    return [{"slug": slug, "name": name} for slug, name in CATEGORIES.items()]


def validate_category(category: Optional[str]) -> Optional[str]:
    """
    Check a category slug against the registry.
    
    Args:
        category: Slug or None
        
    Returns:
        The slug unchanged
        
    Raises:
        UnknownCategoryError: If the slug is not registered
    """
    if category and category not in CATEGORIES:
        raise UnknownCategoryError(category, list(CATEGORIES.items()))
    return category


def validate_regions(regions: Sequence[str]) -> Sequence[str]:
    """
    Check region codes.
    
    Args:
        regions: Lowercased region codes
        
    Returns:
        The codes unchanged
        
    Raises:
        UnknownRegionError: On the first unknown code
    """
    for region in regions:
        if region not in REGION_CODES:
            raise UnknownRegionError(region)
    return regions
