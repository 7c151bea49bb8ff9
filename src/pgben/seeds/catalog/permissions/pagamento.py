from pgben.seeds.catalog import PermissionSpec as P

MODULO = "pagamento"

PERMISSOES: tuple[P, ...] = (
    P("pagamento.listar", "Listar pagamentos", "UNIDADE"),
    P("pagamento.visualizar", "Visualizar detalhes de pagamento", "UNIDADE"),
    P("pagamento.criar", "Criar novo pagamento", "UNIDADE"),
    P("pagamento.editar", "Editar pagamento pendente", "UNIDADE"),
    P("pagamento.cancelar", "Cancelar pagamento", "UNIDADE"),
    P("pagamento.processar", "Processar pagamento", "UNIDADE"),
    P("pagamento.autorizar", "Autorizar pagamento", "UNIDADE"),
    P("pagamento.rejeitar", "Rejeitar pagamento", "UNIDADE"),
    P("pagamento.confirmar", "Confirmar pagamento realizado", "UNIDADE"),
    P("pagamento.lote.criar", "Criar lote de pagamentos", "UNIDADE"),
    P("pagamento.lote.visualizar", "Visualizar lote de pagamentos", "UNIDADE"),
    P("pagamento.lote.processar", "Processar lote de pagamentos", "UNIDADE"),
    P("pagamento.lote.autorizar", "Autorizar lote de pagamentos", "UNIDADE"),
    P("pagamento.lote.cancelar", "Cancelar lote de pagamentos", "UNIDADE"),
    P("pagamento.lote.exportar", "Exportar lote para banco", "UNIDADE"),
    P("pagamento.validar.dados", "Validar dados bancários", "UNIDADE"),
    P("pagamento.validar.beneficiario", "Validar dados do beneficiário", "UNIDADE"),
    P("pagamento.validar.valor", "Validar valor do pagamento", "UNIDADE"),
    P("pagamento.validar.duplicidade", "Validar duplicidade de pagamentos", "UNIDADE"),
    P("pagamento.conciliar", "Conciliar pagamentos com retorno bancário", "UNIDADE"),
    P("pagamento.conciliacao.automatica", "Executar conciliação automática", "GLOBAL"),
    P("pagamento.conciliacao.manual", "Realizar conciliação manual", "UNIDADE"),
    P("pagamento.conciliacao.relatorio", "Gerar relatório de conciliação", "UNIDADE"),
    P("pagamento.estornar", "Estornar pagamento", "UNIDADE"),
    P("pagamento.estorno.autorizar", "Autorizar estorno de pagamento", "UNIDADE"),
    P("pagamento.estorno.processar", "Processar estorno autorizado", "UNIDADE"),
    P("pagamento.consultar.status", "Consultar status no banco", "UNIDADE"),
    P("pagamento.consultar.historico", "Consultar histórico de pagamentos", "UNIDADE"),
    P("pagamento.consultar.extrato", "Consultar extrato bancário", "UNIDADE"),
    P("pagamento.banco.configurar", "Configurar dados bancários", "GLOBAL"),
    P("pagamento.banco.testar", "Testar conexão bancária", "GLOBAL"),
    P("pagamento.banco.listar", "Listar bancos disponíveis", "GLOBAL"),
    P("pagamento.retorno.importar", "Importar arquivo de retorno bancário", "UNIDADE"),
    P("pagamento.retorno.processar", "Processar arquivo de retorno", "UNIDADE"),
    P("pagamento.retorno.visualizar", "Visualizar detalhes do retorno", "UNIDADE"),
    P("pagamento.relatorio.financeiro", "Gerar relatório financeiro", "UNIDADE"),
    P("pagamento.relatorio.pagamentos", "Gerar relatório de pagamentos", "UNIDADE"),
    P("pagamento.relatorio.estornos", "Gerar relatório de estornos", "UNIDADE"),
    P("pagamento.relatorio.exportar", "Exportar relatórios financeiros", "UNIDADE"),
    P("pagamento.auditoria.visualizar", "Visualizar auditoria de pagamentos", "UNIDADE"),
    P("pagamento.auditoria.exportar", "Exportar dados de auditoria", "UNIDADE"),
    P("pagamento.auditoria.trilha", "Visualizar trilha de auditoria", "UNIDADE"),
    P("pagamento.configuracao.visualizar", "Visualizar configurações de pagamento", "GLOBAL"),
    P("pagamento.configuracao.editar", "Editar configurações de pagamento", "GLOBAL"),
    P("pagamento.limite.configurar", "Configurar limites de pagamento", "GLOBAL"),
    P("pagamento.calendario.configurar", "Configurar calendário de pagamentos", "GLOBAL"),
    P("pagamento.monitorar.fila", "Monitorar fila de pagamentos", "GLOBAL"),
    P("pagamento.monitorar.status", "Monitorar status dos pagamentos", "UNIDADE"),
    P("pagamento.dashboard.visualizar", "Visualizar dashboard de pagamentos", "UNIDADE"),
)
