from pgben.seeds.catalog import PermissionSpec as P

MODULO = "relatorios-unificado"

PERMISSOES: tuple[P, ...] = (
    P("relatorios-unificado.listar", "Listar relatórios disponíveis", "UNIDADE"),
    P("relatorios-unificado.visualizar", "Visualizar relatórios gerados", "UNIDADE"),
    P("relatorios-unificado.gerar", "Gerar novos relatórios", "UNIDADE"),
    P("relatorios-unificado.exportar", "Exportar relatórios em diversos formatos", "UNIDADE"),
    P("relatorios-unificado.agendar", "Agendar geração automática de relatórios", "UNIDADE"),
    P("relatorios-unificado.operacional.beneficios", "Gerar relatório operacional de benefícios", "UNIDADE"),
    P("relatorios-unificado.operacional.solicitacoes", "Gerar relatório operacional de solicitações", "UNIDADE"),
    P("relatorios-unificado.operacional.cidadaos", "Gerar relatório operacional de cidadãos", "UNIDADE"),
    P("relatorios-unificado.operacional.usuarios", "Gerar relatório operacional de usuários", "GLOBAL"),
    P("relatorios-unificado.operacional.unidades", "Gerar relatório operacional de unidades", "GLOBAL"),
    P("relatorios-unificado.gerencial.dashboard", "Gerar relatório gerencial de dashboard", "UNIDADE"),
    P("relatorios-unificado.gerencial.indicadores", "Gerar relatório gerencial de indicadores", "UNIDADE"),
    P("relatorios-unificado.gerencial.performance", "Gerar relatório gerencial de performance", "UNIDADE"),
    P("relatorios-unificado.gerencial.produtividade", "Gerar relatório gerencial de produtividade", "UNIDADE"),
    P("relatorios-unificado.gerencial.consolidado", "Gerar relatório gerencial consolidado", "GLOBAL"),
    P("relatorios-unificado.estatistico.mensal", "Gerar relatório estatístico mensal", "UNIDADE"),
    P("relatorios-unificado.estatistico.trimestral", "Gerar relatório estatístico trimestral", "UNIDADE"),
    P("relatorios-unificado.estatistico.anual", "Gerar relatório estatístico anual", "UNIDADE"),
    P("relatorios-unificado.estatistico.comparativo", "Gerar relatório estatístico comparativo", "UNIDADE"),
    P("relatorios-unificado.estatistico.tendencia", "Gerar relatório de análise de tendências", "UNIDADE"),
    P("relatorios-unificado.financeiro.pagamentos", "Gerar relatório financeiro de pagamentos", "UNIDADE"),
    P("relatorios-unificado.financeiro.orcamento", "Gerar relatório financeiro de orçamento", "GLOBAL"),
    P("relatorios-unificado.financeiro.execucao", "Gerar relatório de execução financeira", "UNIDADE"),
    P("relatorios-unificado.financeiro.conciliacao", "Gerar relatório de conciliação financeira", "UNIDADE"),
    P("relatorios-unificado.financeiro.auditoria", "Gerar relatório de auditoria financeira", "GLOBAL"),
    P("relatorios-unificado.compliance.lgpd", "Gerar relatório de compliance LGPD", "GLOBAL"),
    P("relatorios-unificado.compliance.auditoria", "Gerar relatório de compliance e auditoria", "GLOBAL"),
    P("relatorios-unificado.compliance.acesso", "Gerar relatório de controle de acesso", "GLOBAL"),
    P("relatorios-unificado.compliance.seguranca", "Gerar relatório de segurança", "GLOBAL"),
    P("relatorios-unificado.integracao.cadunico", "Gerar relatório de integração CadÚnico", "UNIDADE"),
    P("relatorios-unificado.integracao.suas", "Gerar relatório de integração SUAS", "UNIDADE"),
    P("relatorios-unificado.integracao.bancaria", "Gerar relatório de integração bancária", "UNIDADE"),
    P("relatorios-unificado.integracao.status", "Gerar relatório de status das integrações", "GLOBAL"),
    P("relatorios-unificado.integracao.erros", "Gerar relatório de erros de integração", "GLOBAL"),
    P("relatorios-unificado.customizado.criar", "Criar relatórios customizados", "UNIDADE"),
    P("relatorios-unificado.customizado.editar", "Editar relatórios customizados", "UNIDADE"),
    P("relatorios-unificado.customizado.excluir", "Excluir relatórios customizados", "UNIDADE"),
    P("relatorios-unificado.customizado.compartilhar", "Compartilhar relatórios customizados", "UNIDADE"),
    P("relatorios-unificado.customizado.template", "Gerenciar templates de relatórios", "GLOBAL"),
    P("relatorios-unificado.agendamento.criar", "Criar agendamento de relatórios", "UNIDADE"),
    P("relatorios-unificado.agendamento.editar", "Editar agendamento de relatórios", "UNIDADE"),
    P("relatorios-unificado.agendamento.excluir", "Excluir agendamento de relatórios", "UNIDADE"),
    P("relatorios-unificado.agendamento.executar", "Executar agendamento manualmente", "UNIDADE"),
    P("relatorios-unificado.agendamento.monitorar", "Monitorar execução de agendamentos", "GLOBAL"),
    P("relatorios-unificado.distribuicao.email", "Distribuir relatórios por email", "UNIDADE"),
    P("relatorios-unificado.distribuicao.ftp", "Distribuir relatórios via FTP", "GLOBAL"),
    P("relatorios-unificado.distribuicao.api", "Distribuir relatórios via API", "GLOBAL"),
    P("relatorios-unificado.distribuicao.configurar", "Configurar canais de distribuição", "GLOBAL"),
    P("relatorios-unificado.historico.visualizar", "Visualizar histórico de relatórios", "UNIDADE"),
    P("relatorios-unificado.historico.reexecutar", "Reexecutar relatórios do histórico", "UNIDADE"),
    P("relatorios-unificado.historico.excluir", "Excluir relatórios do histórico", "UNIDADE"),
    P("relatorios-unificado.historico.arquivar", "Arquivar relatórios antigos", "GLOBAL"),
    P("relatorios-unificado.configuracao.visualizar", "Visualizar configurações de relatórios", "GLOBAL"),
    P("relatorios-unificado.configuracao.editar", "Editar configurações de relatórios", "GLOBAL"),
    P("relatorios-unificado.fonte.configurar", "Configurar fontes de dados", "GLOBAL"),
    P("relatorios-unificado.formato.configurar", "Configurar formatos de exportação", "GLOBAL"),
    P("relatorios-unificado.monitorar.performance", "Monitorar performance dos relatórios", "GLOBAL"),
    P("relatorios-unificado.monitorar.uso", "Monitorar uso dos relatórios", "GLOBAL"),
    P("relatorios-unificado.monitorar.erros", "Monitorar erros na geração", "GLOBAL"),
    P("relatorios-unificado.dashboard.admin", "Visualizar dashboard administrativo", "GLOBAL"),
)
