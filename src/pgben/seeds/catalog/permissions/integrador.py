from pgben.seeds.catalog import PermissionSpec as P

MODULO = "integrador"

PERMISSOES: tuple[P, ...] = (
    P("integrador.listar", "Listar integrações disponíveis", "GLOBAL"),
    P("integrador.visualizar", "Visualizar detalhes de integração", "GLOBAL"),
    P("integrador.configurar", "Configurar parâmetros de integração", "GLOBAL"),
    P("integrador.testar", "Testar conectividade de integração", "GLOBAL"),
    P("integrador.ativar", "Ativar integração", "GLOBAL"),
    P("integrador.desativar", "Desativar integração", "GLOBAL"),
    P("integrador.cadunico.consultar", "Consultar dados no CadÚnico", "UNIDADE"),
    P("integrador.cadunico.sincronizar", "Sincronizar dados com CadÚnico", "UNIDADE"),
    P("integrador.cadunico.validar", "Validar dados do CadÚnico", "UNIDADE"),
    P("integrador.cadunico.configurar", "Configurar integração com CadÚnico", "GLOBAL"),
    P("integrador.suas.consultar", "Consultar dados no SUAS", "UNIDADE"),
    P("integrador.suas.enviar", "Enviar dados para o SUAS", "UNIDADE"),
    P("integrador.suas.sincronizar", "Sincronizar dados com SUAS", "UNIDADE"),
    P("integrador.suas.configurar", "Configurar integração com SUAS", "GLOBAL"),
    P("integrador.banco.consultar", "Consultar dados bancários", "GLOBAL"),
    P("integrador.banco.validar", "Validar dados bancários", "GLOBAL"),
    P("integrador.banco.configurar", "Configurar integração bancária", "GLOBAL"),
    P("integrador.pagamento.processar", "Processar pagamentos via integração", "UNIDADE"),
    P("integrador.pagamento.consultar", "Consultar status de pagamentos", "UNIDADE"),
    P("integrador.pagamento.configurar", "Configurar integração de pagamento", "GLOBAL"),
    P("integrador.log.visualizar", "Visualizar logs de integração", "UNIDADE"),
    P("integrador.log.exportar", "Exportar logs de integração", "UNIDADE"),
    P("integrador.monitoramento.visualizar", "Visualizar status de monitoramento", "GLOBAL"),
    P("integrador.monitoramento.configurar", "Configurar alertas de monitoramento", "GLOBAL"),
    P("integrador.sincronizacao.executar", "Executar sincronização manual", "UNIDADE"),
    P("integrador.sincronizacao.agendar", "Agendar sincronização automática", "GLOBAL"),
    P("integrador.sincronizacao.historico", "Visualizar histórico de sincronizações", "UNIDADE"),
    P("integrador.relatorio.gerar", "Gerar relatório de integrações", "UNIDADE"),
    P("integrador.relatorio.exportar", "Exportar relatório de integrações", "UNIDADE"),
    P("integrador.manutencao.executar", "Executar rotinas de manutenção", "GLOBAL"),
    P("integrador.cache.limpar", "Limpar cache de integrações", "GLOBAL"),
)
