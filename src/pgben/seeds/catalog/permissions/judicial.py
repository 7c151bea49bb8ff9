from pgben.seeds.catalog import PermissionSpec as P

MODULO = "judicial"

PERMISSOES: tuple[P, ...] = (
    P("judicial.processo.listar", "Listar processos judiciais", "UNIDADE"),
    P("judicial.processo.visualizar", "Visualizar detalhes de processo judicial", "UNIDADE"),
    P("judicial.processo.criar", "Criar novo processo judicial", "UNIDADE"),
    P("judicial.processo.editar", "Editar processo judicial", "UNIDADE"),
    P("judicial.processo.arquivar", "Arquivar processo judicial", "UNIDADE"),
    P("judicial.processo.desarquivar", "Desarquivar processo judicial", "UNIDADE"),
    P("judicial.mandado.listar", "Listar mandados judiciais", "UNIDADE"),
    P("judicial.mandado.visualizar", "Visualizar detalhes de mandado judicial", "UNIDADE"),
    P("judicial.mandado.criar", "Criar novo mandado judicial", "UNIDADE"),
    P("judicial.mandado.editar", "Editar mandado judicial", "UNIDADE"),
    P("judicial.mandado.cumprir", "Marcar mandado como cumprido", "UNIDADE"),
    P("judicial.mandado.cancelar", "Cancelar mandado judicial", "UNIDADE"),
    P("judicial.decisao.listar", "Listar decisões judiciais", "UNIDADE"),
    P("judicial.decisao.visualizar", "Visualizar decisão judicial", "UNIDADE"),
    P("judicial.decisao.registrar", "Registrar nova decisão judicial", "UNIDADE"),
    P("judicial.decisao.editar", "Editar decisão judicial", "UNIDADE"),
    P("judicial.decisao.implementar", "Implementar decisão judicial", "UNIDADE"),
    P("judicial.audiencia.listar", "Listar audiências judiciais", "UNIDADE"),
    P("judicial.audiencia.visualizar", "Visualizar detalhes de audiência", "UNIDADE"),
    P("judicial.audiencia.agendar", "Agendar audiência judicial", "UNIDADE"),
    P("judicial.audiencia.reagendar", "Reagendar audiência judicial", "UNIDADE"),
    P("judicial.audiencia.cancelar", "Cancelar audiência judicial", "UNIDADE"),
    P("judicial.audiencia.registrar_ata", "Registrar ata de audiência", "UNIDADE"),
    P("judicial.documento.listar", "Listar documentos judiciais", "UNIDADE"),
    P("judicial.documento.visualizar", "Visualizar documento judicial", "UNIDADE"),
    P("judicial.documento.upload", "Fazer upload de documento judicial", "UNIDADE"),
    P("judicial.documento.download", "Fazer download de documento judicial", "UNIDADE"),
    P("judicial.documento.excluir", "Excluir documento judicial", "UNIDADE"),
    P("judicial.documento.assinar", "Assinar documento judicial digitalmente", "USUARIO"),
    P("judicial.prazo.listar", "Listar prazos judiciais", "UNIDADE"),
    P("judicial.prazo.visualizar", "Visualizar detalhes de prazo judicial", "UNIDADE"),
    P("judicial.prazo.criar", "Criar novo prazo judicial", "UNIDADE"),
    P("judicial.prazo.editar", "Editar prazo judicial", "UNIDADE"),
    P("judicial.prazo.cumprir", "Marcar prazo como cumprido", "UNIDADE"),
    P("judicial.prazo.prorrogar", "Prorrogar prazo judicial", "UNIDADE"),
    P("judicial.notificacao.listar", "Listar notificações judiciais", "UNIDADE"),
    P("judicial.notificacao.enviar", "Enviar notificação judicial", "UNIDADE"),
    P("judicial.notificacao.confirmar", "Confirmar recebimento de notificação", "UNIDADE"),
    P("judicial.relatorio.gerar", "Gerar relatório judicial", "UNIDADE"),
    P("judicial.relatorio.exportar", "Exportar relatório judicial", "UNIDADE"),
    P("judicial.configuracao.visualizar", "Visualizar configurações judiciais", "GLOBAL"),
    P("judicial.configuracao.editar", "Editar configurações judiciais", "GLOBAL"),
)
