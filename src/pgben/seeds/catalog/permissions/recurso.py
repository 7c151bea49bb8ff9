from pgben.seeds.catalog import PermissionSpec as P

MODULO = "recurso"

PERMISSOES: tuple[P, ...] = (
    P("recurso.listar", "Listar recursos", "UNIDADE"),
    P("recurso.visualizar", "Visualizar detalhes do recurso", "UNIDADE"),
    P("recurso.criar", "Criar novo recurso", "UNIDADE"),
    P("recurso.editar", "Editar recurso", "UNIDADE"),
    P("recurso.excluir", "Excluir recurso", "UNIDADE"),
    P("recurso.protocolar", "Protocolar recurso", "UNIDADE"),
    P("recurso.protocolo.visualizar", "Visualizar protocolo do recurso", "UNIDADE"),
    P("recurso.protocolo.editar", "Editar dados do protocolo", "UNIDADE"),
    P("recurso.analisar", "Analisar recurso", "UNIDADE"),
    P("recurso.parecer.criar", "Criar parecer técnico", "UNIDADE"),
    P("recurso.parecer.editar", "Editar parecer técnico", "UNIDADE"),
    P("recurso.parecer.visualizar", "Visualizar parecer técnico", "UNIDADE"),
    P("recurso.parecer.aprovar", "Aprovar parecer técnico", "UNIDADE"),
    P("recurso.decidir", "Decidir sobre recurso", "UNIDADE"),
    P("recurso.deferir", "Deferir recurso", "UNIDADE"),
    P("recurso.indeferir", "Indeferir recurso", "UNIDADE"),
    P("recurso.decisao.fundamentar", "Fundamentar decisão do recurso", "UNIDADE"),
    P("recurso.decisao.publicar", "Publicar decisão do recurso", "UNIDADE"),
    P("recurso.tramitar", "Tramitar recurso entre setores", "UNIDADE"),
    P("recurso.encaminhar", "Encaminhar recurso para análise", "UNIDADE"),
    P("recurso.devolver", "Devolver recurso para correção", "UNIDADE"),
    P("recurso.receber", "Receber recurso para análise", "UNIDADE"),
    P("recurso.historico.tramitacao", "Visualizar histórico de tramitação", "UNIDADE"),
    P("recurso.prazo.visualizar", "Visualizar prazos do recurso", "UNIDADE"),
    P("recurso.prazo.prorrogar", "Prorrogar prazo do recurso", "UNIDADE"),
    P("recurso.prazo.suspender", "Suspender prazo do recurso", "UNIDADE"),
    P("recurso.prazo.restabelecer", "Restabelecer prazo suspenso", "UNIDADE"),
    P("recurso.prazo.monitorar", "Monitorar prazos em vencimento", "UNIDADE"),
    P("recurso.documento.anexar", "Anexar documentos ao recurso", "UNIDADE"),
    P("recurso.documento.visualizar", "Visualizar documentos do recurso", "UNIDADE"),
    P("recurso.documento.remover", "Remover documentos do recurso", "UNIDADE"),
    P("recurso.documento.validar", "Validar documentos anexados", "UNIDADE"),
    P("recurso.documento.solicitar", "Solicitar documentos complementares", "UNIDADE"),
    P("recurso.notificar.interessado", "Notificar interessado sobre recurso", "UNIDADE"),
    P("recurso.notificar.decisao", "Notificar decisão do recurso", "UNIDADE"),
    P("recurso.notificar.prazo", "Notificar sobre prazos", "UNIDADE"),
    P("recurso.notificacao.visualizar", "Visualizar notificações enviadas", "UNIDADE"),
    P("recurso.hierarquico.criar", "Criar recurso hierárquico", "UNIDADE"),
    P("recurso.hierarquico.analisar", "Analisar recurso hierárquico", "GLOBAL"),
    P("recurso.hierarquico.decidir", "Decidir recurso hierárquico", "GLOBAL"),
    P("recurso.hierarquico.encaminhar", "Encaminhar para instância superior", "UNIDADE"),
    P("recurso.comissao.designar", "Designar comissão de recursos", "GLOBAL"),
    P("recurso.comissao.participar", "Participar de comissão de recursos", "GLOBAL"),
    P("recurso.comissao.presidir", "Presidir comissão de recursos", "GLOBAL"),
    P("recurso.comissao.votar", "Votar em comissão de recursos", "GLOBAL"),
    P("recurso.relatorio.geral", "Gerar relatório geral de recursos", "UNIDADE"),
    P("recurso.relatorio.estatistico", "Gerar relatório estatístico", "UNIDADE"),
    P("recurso.relatorio.prazo", "Gerar relatório de prazos", "UNIDADE"),
    P("recurso.relatorio.decisao", "Gerar relatório de decisões", "UNIDADE"),
    P("recurso.relatorio.exportar", "Exportar relatórios de recursos", "UNIDADE"),
    P("recurso.auditoria.visualizar", "Visualizar auditoria de recursos", "UNIDADE"),
    P("recurso.auditoria.exportar", "Exportar dados de auditoria", "UNIDADE"),
    P("recurso.auditoria.trilha", "Visualizar trilha de auditoria", "UNIDADE"),
    P("recurso.configuracao.visualizar", "Visualizar configurações de recursos", "GLOBAL"),
    P("recurso.configuracao.editar", "Editar configurações de recursos", "GLOBAL"),
    P("recurso.tipo.configurar", "Configurar tipos de recursos", "GLOBAL"),
    P("recurso.fluxo.configurar", "Configurar fluxo de tramitação", "GLOBAL"),
    P("recurso.prazo.configurar", "Configurar prazos padrão", "GLOBAL"),
    P("recurso.monitorar.pendencias", "Monitorar recursos pendentes", "UNIDADE"),
    P("recurso.monitorar.prazos", "Monitorar prazos em vencimento", "UNIDADE"),
    P("recurso.dashboard.visualizar", "Visualizar dashboard de recursos", "UNIDADE"),
    P("recurso.indicador.visualizar", "Visualizar indicadores de recursos", "UNIDADE"),
)
