"""
Встроенный справочник компонентов Mística.

Дополняет каталог Storybook компонентами, которых в нём нет, заменяет
его целиком, когда Storybook недоступен, и служит таблицей описаний
для историй без собственного описания. Описания взяты из документации
Mística (на португальском).
"""
from typing import Dict, List

from ..models import CatalogComponent
from ..utils import generate_component_id, generate_story_url

KNOWN_COMPONENTS: Dict[str, List[tuple]] = {
    "components": [
        ("Avatar", "Componente para exibir foto de perfil ou iniciais do usuário"),
        ("Badge", "Indicador visual para notificações e status"),
        ("Breadcrumbs", "Navegação hierárquica para indicar localização atual"),
        ("Button", "Botão para ações primárias e secundárias"),
        ("ButtonPrimary", "Botão principal para a ação mais importante da tela"),
        ("ButtonSecondary", "Botão secundário para ações alternativas"),
        ("ButtonDanger", "Botão para ações destrutivas ou irreversíveis"),
        ("ButtonLink", "Botão com aparência de link para ações de baixa ênfase"),
        ("IconButton", "Botão com ícone para ações visuais"),
        ("Touchable", "Área tocável genérica para elementos interativos"),
        ("Callout", "Destaque para informações importantes"),
        ("Card", "Container para agrupar conteúdo relacionado"),
        ("DataCard", "Card para exibição de dados estruturados com ações"),
        ("MediaCard", "Card com imagem ou vídeo em destaque"),
        ("HighlightedCard", "Card para destacar informações importantes"),
        ("Checkbox", "Caixa de seleção para opções múltiplas"),
        ("Counter", "Contador numérico para exibir quantidades"),
        ("Divider", "Separador visual entre seções"),
        ("Input", "Campo de entrada de texto básico"),
        ("TextField", "Campo de texto com label e validação"),
        ("EmailField", "Campo de entrada para endereços de email com validação"),
        ("PasswordField", "Campo de senha com opção de mostrar o conteúdo"),
        ("IntegerField", "Campo numérico para valores inteiros"),
        ("DecimalField", "Campo numérico para valores decimais"),
        ("SearchField", "Campo de busca com ícone e limpeza rápida"),
        ("DateField", "Campo para seleção de data"),
        ("DateTimeField", "Campo para seleção de data e hora"),
        ("PinField", "Campo para código PIN / OTP de segurança"),
        ("Form", "Formulário com gerenciamento de estado e validação dos campos"),
        ("LoadingBar", "Barra de progresso para indicar carregamento"),
        ("Logo", "Logotipo da marca Telefónica"),
        ("Menu", "Menu de opções contextual"),
        ("Modal", "Janela modal para conteúdo sobreposto"),
        ("ActionsSheet", "Sheet com lista de ações para o usuário"),
        ("InfoSheet", "Sheet informativo sobreposto ao conteúdo"),
        ("Drawer", "Painel lateral sobreposto para conteúdo secundário"),
        ("NavigationBar", "Barra de navegação superior com título e ações"),
        ("NavigationBreadcrumbs", "Breadcrumbs de navegação para páginas hierárquicas"),
        ("Header", "Cabeçalho de página com título e ações"),
        ("Popover", "Conteúdo flutuante contextual"),
        ("ProgressBar", "Indicador de progresso visual"),
        ("RadioButton", "Botão de seleção única"),
        ("RowList", "Lista de linhas simples"),
        ("BoxedRowList", "Lista de linhas em caixas para listas interativas"),
        ("BoxedRow", "Linha em caixa com título, ícone e navegação"),
        ("Select", "Menu dropdown para seleção de opções"),
        ("Sheet", "Modal tipo sheet para formulários e seleções"),
        ("Snackbar", "Notificação temporária na parte inferior"),
        ("Spinner", "Indicador de carregamento animado"),
        ("StackingGroup", "Agrupamento visual de elementos empilhados"),
        ("Stepper", "Indicador de progresso em etapas"),
        ("Switch", "Interruptor para alternância de estados"),
        ("Table", "Tabela para exibição de dados estruturados"),
        ("Tabs", "Navegação por abas para organizar conteúdo"),
        ("Tag", "Etiqueta para categorização e filtros"),
        ("Text", "Texto base com estilos de tipografia do design system"),
        ("Text1", "Texto no preset tipográfico text1"),
        ("Text2", "Texto no preset tipográfico text2"),
        ("Text3", "Texto no preset tipográfico text3"),
        ("Text4", "Texto no preset tipográfico text4"),
        ("Text5", "Texto no preset tipográfico text5"),
        ("Text6", "Texto no preset tipográfico text6"),
        ("Text7", "Texto no preset tipográfico text7"),
        ("Text8", "Texto no preset tipográfico text8"),
        ("Text9", "Texto no preset tipográfico text9"),
        ("Text10", "Texto no preset tipográfico text10"),
        ("Title1", "Título de primeiro nível"),
        ("Title2", "Título de segundo nível"),
        ("Title3", "Título de terceiro nível"),
        ("TextLink", "Link de texto com estilos consistentes"),
        ("Timeline", "Linha do tempo para eventos cronológicos"),
        ("Tooltip", "Dica contextual que aparece ao passar o mouse"),
    ],
    "layout": [
        ("Align", "Utilitário para alinhamento de elementos"),
        ("Box", "Container básico para layout com propriedades de espaçamento"),
        ("ButtonLayout", "Layout especializado para organização de botões"),
        ("ButtonFixedFooterLayout", "Layout com botão fixo no rodapé da tela"),
        ("Grid", "Sistema de grid responsivo para organização de conteúdo"),
        ("GridLayout", "Layout de grid com colunas predefinidas"),
        ("HorizontalScroll", "Container com scroll horizontal"),
        ("Inline", "Container para alinhar elementos horizontalmente com espaçamento"),
        ("MasterDetail", "Layout mestre-detalhe para navegação hierárquica"),
        ("Stack", "Container para empilhamento vertical ou horizontal"),
    ],
    "feedback": [
        ("ErrorFeedbackScreen", "Tela de feedback para exibir mensagens de erro com ícone e ações"),
        ("SuccessFeedbackScreen", "Tela de feedback para exibir mensagens de sucesso com ícone e ações"),
        ("InfoFeedbackScreen", "Tela de feedback para exibir mensagens informativas com ícone e ações"),
        ("WarningFeedbackScreen", "Tela de feedback para exibir mensagens de aviso com ícone e ações"),
        ("FeedbackScreen", "Tela de feedback genérica para exibir mensagens com ícone e ações"),
        ("SuccessFeedback", "Componente de feedback para indicar sucesso em operações"),
        ("ErrorFeedback", "Componente de feedback para indicar erros em operações"),
    ],
    "utilities": [
        ("FixedToTop", "Utilitário para fixar elementos no topo"),
        ("OverscrollColor", "Configuração de cor para overscroll"),
        ("SkinVars", "Variáveis de tema e personalização"),
        ("Theme", "Configuração e controle de temas"),
    ],
    "hooks": [
        ("useDocumentVisibility", "Hook para detectar visibilidade do documento"),
        ("useElementDimensions", "Hook para obter dimensões de elementos"),
        ("useIsInViewport", "Hook para detectar se elemento está na viewport"),
        ("useModalState", "Hook para gerenciar estado de modais"),
        ("useScreenSize", "Hook para detectar tamanho da tela"),
        ("useTheme", "Hook para acessar e modificar tema atual"),
        ("useWindowSize", "Hook para obter dimensões da janela"),
    ],
    "icons": [
        ("Icon", "Catálogo completo de ícones do design system Mística"),
        ("IconCatalog", "Visualização de todos os ícones disponíveis"),
    ],
    "community": [
        ("AdvancedDataCard", "Card avançado para exibição de dados complexos"),
        ("AdvancedDataCarousel", "Carrossel de cards de dados avançados"),
        ("ExampleComponent", "Componente de exemplo da comunidade"),
    ],
    "lab": [
        ("Autocomplete", "Campo de texto com autocompletar experimental"),
    ],
}

EXTRA_DESCRIPTIONS = {
    "Catalog": "Catálogo completo de ícones do design system Mística com busca e categorização",
    "InfoFeedback": "Componente de feedback para fornecer informações ao usuário",
    "WarningFeedback": "Componente de feedback para alertas e avisos",
}

_DESCRIPTIONS = {name: description for entries in KNOWN_COMPONENTS.values() for name, description in entries}
_DESCRIPTIONS.update(EXTRA_DESCRIPTIONS)


def generate_description(component_name: str, category: str) -> str:
    """Описание известного компонента или шаблонное описание."""
    return _DESCRIPTIONS.get(
        component_name,
        f"Componente {component_name} do design system Mística ({category})",
    )


def get_known_components(base_url: str) -> List[CatalogComponent]:
    components = []
    for category, entries in KNOWN_COMPONENTS.items():
        for name, description in entries:
            components.append(CatalogComponent(
                id=generate_component_id(name, category),
                name=name,
                category=category,
                description=description,
                story_url=generate_story_url(base_url, category, name),
            ))
    return components
