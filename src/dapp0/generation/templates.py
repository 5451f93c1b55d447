"""
Static fallback code, used when the generation service is unavailable.

Templates are keyed by (project type, chain) and filled with
``string.Template``, so JSX and Rust braces need no escaping. ``$prompt`` is
the user's request; ``$chain_name`` is the chain's display name. EVM chains
share one frontend and one contract template.
"""

from __future__ import annotations

from string import Template

from dapp0.chains.registry import ChainType, get_chain_config, is_evm
from dapp0.db.models import ProjectType

_SOLANA_FRONTEND = Template("""\
import React from 'react'
import { ConnectionProvider, WalletProvider } from '@solana/wallet-adapter-react'
import { WalletModalProvider, WalletMultiButton } from '@solana/wallet-adapter-react-ui'
import { PhantomWalletAdapter } from '@solana/wallet-adapter-wallets'
import { clusterApiUrl } from '@solana/web3.js'

const wallets = [new PhantomWalletAdapter()]

export default function GeneratedComponent() {
  return (
    <ConnectionProvider endpoint={clusterApiUrl('devnet')}>
      <WalletProvider wallets={wallets} autoConnect>
        <WalletModalProvider>
          <div className="min-h-screen bg-gray-900 text-white p-8">
            <div className="max-w-4xl mx-auto">
              <h1 className="text-3xl font-bold mb-8">Solana dApp</h1>
              <div className="bg-gray-800 rounded-lg p-6">
                <h2 className="text-xl font-semibold mb-4">Wallet Connection</h2>
                <p className="text-gray-300 mb-4">
                  Connect your Solana wallet to interact with the blockchain.
                </p>
                <WalletMultiButton />
              </div>
              <div className="mt-8 bg-gray-800 rounded-lg p-6">
                <h2 className="text-xl font-semibold mb-4">Generated for: $prompt</h2>
                <p className="text-gray-300">
                  This component was generated based on your prompt and includes Solana wallet integration.
                </p>
              </div>
            </div>
          </div>
        </WalletModalProvider>
      </WalletProvider>
    </ConnectionProvider>
  )
}
""")

_EVM_FRONTEND = Template("""\
import React from 'react'
import { useAccount, useConnect, useDisconnect } from 'wagmi'

export default function GeneratedComponent() {
  const { address, isConnected } = useAccount()
  const { connect, connectors } = useConnect()
  const { disconnect } = useDisconnect()

  return (
    <div className="min-h-screen bg-gray-900 text-white p-8">
      <div className="max-w-4xl mx-auto">
        <h1 className="text-3xl font-bold mb-8">$chain_name dApp</h1>
        <div className="bg-gray-800 rounded-lg p-6">
          <h2 className="text-xl font-semibold mb-4">Wallet Connection</h2>
          <p className="text-gray-300 mb-4">
            Connect your $chain_name wallet to interact with the blockchain.
          </p>
          {isConnected ? (
            <div>
              <p className="text-green-400 mb-2">Connected: {address}</p>
              <button
                onClick={() => disconnect()}
                className="bg-red-600 hover:bg-red-700 px-4 py-2 rounded-lg transition-colors"
              >
                Disconnect
              </button>
            </div>
          ) : (
            <button
              onClick={() => connect({ connector: connectors[0] })}
              className="bg-blue-600 hover:bg-blue-700 px-4 py-2 rounded-lg transition-colors"
            >
              Connect Wallet
            </button>
          )}
        </div>
        <div className="mt-8 bg-gray-800 rounded-lg p-6">
          <h2 className="text-xl font-semibold mb-4">Generated for: $prompt</h2>
          <p className="text-gray-300">
            This component was generated based on your prompt and includes $chain_name wallet integration.
          </p>
        </div>
      </div>
    </div>
  )
}
""")

_SUI_FRONTEND = Template("""\
import React from 'react'
import { ConnectButton, useCurrentAccount } from '@mysten/dapp-kit'

export default function GeneratedComponent() {
  const account = useCurrentAccount()

  return (
    <div className="min-h-screen bg-gray-900 text-white p-8">
      <div className="max-w-4xl mx-auto">
        <h1 className="text-3xl font-bold mb-8">Sui dApp</h1>
        <div className="bg-gray-800 rounded-lg p-6">
          <h2 className="text-xl font-semibold mb-4">Wallet Connection</h2>
          <p className="text-gray-300 mb-4">
            Connect your Sui wallet to interact with the blockchain.
          </p>
          {account ? (
            <p className="text-green-400 mb-2">Connected: {account.address}</p>
          ) : null}
          <ConnectButton />
        </div>
        <div className="mt-8 bg-gray-800 rounded-lg p-6">
          <h2 className="text-xl font-semibold mb-4">Generated for: $prompt</h2>
          <p className="text-gray-300">
            This component was generated based on your prompt and includes Sui wallet integration.
          </p>
        </div>
      </div>
    </div>
  )
}
""")

_XRP_FRONTEND = Template("""\
import React from 'react'
import { Client } from 'xrpl'

export default function GeneratedComponent() {
  const [connected, setConnected] = React.useState(false)
  const [client, setClient] = React.useState<Client | null>(null)

  const connectWallet = async () => {
    try {
      const newClient = new Client('wss://s.altnet.rippletest.net:51233')
      await newClient.connect()
      setClient(newClient)
      setConnected(true)
    } catch (error) {
      console.error('Failed to connect:', error)
    }
  }

  const disconnectWallet = async () => {
    if (client) {
      await client.disconnect()
      setClient(null)
      setConnected(false)
    }
  }

  return (
    <div className="min-h-screen bg-gray-900 text-white p-8">
      <div className="max-w-4xl mx-auto">
        <h1 className="text-3xl font-bold mb-8">XRP Ledger dApp</h1>
        <div className="bg-gray-800 rounded-lg p-6">
          <h2 className="text-xl font-semibold mb-4">Ledger Connection</h2>
          {connected ? (
            <button
              onClick={disconnectWallet}
              className="bg-red-600 hover:bg-red-700 px-4 py-2 rounded-lg transition-colors"
            >
              Disconnect
            </button>
          ) : (
            <button
              onClick={connectWallet}
              className="bg-blue-600 hover:bg-blue-700 px-4 py-2 rounded-lg transition-colors"
            >
              Connect to XRP Ledger
            </button>
          )}
        </div>
        <div className="mt-8 bg-gray-800 rounded-lg p-6">
          <h2 className="text-xl font-semibold mb-4">Generated for: $prompt</h2>
          <p className="text-gray-300">
            This component was generated based on your prompt and includes XRP Ledger integration.
          </p>
        </div>
      </div>
    </div>
  )
}
""")

_SOLANA_AGENT = Template("""\
// Generated Solana Agent Program
use anchor_lang::prelude::*;
use anchor_lang::solana_program::clock::Clock;

declare_id!("YourProgramIdHere");

#[program]
pub mod solana_agent {
    use super::*;

    pub fn initialize_agent(ctx: Context<InitializeAgent>, config: AgentConfig) -> Result<()> {
        let agent = &mut ctx.accounts.agent;
        agent.authority = ctx.accounts.authority.key();
        agent.config = config;
        agent.is_active = true;
        Ok(())
    }

    pub fn execute_agent_logic(ctx: Context<ExecuteAgent>) -> Result<()> {
        // Agent logic for: $prompt
        let clock = Clock::get()?;
        require!(ctx.accounts.agent.is_active, AgentError::Inactive);
        msg!("Agent executing at timestamp: {}", clock.unix_timestamp);
        Ok(())
    }
}

#[derive(Accounts)]
pub struct InitializeAgent<'info> {
    #[account(init, payer = authority, space = 8 + 1024)]
    pub agent: Account<'info, Agent>,
    #[account(mut)]
    pub authority: Signer<'info>,
    pub system_program: Program<'info, System>,
}

#[derive(Accounts)]
pub struct ExecuteAgent<'info> {
    #[account(mut, has_one = authority)]
    pub agent: Account<'info, Agent>,
    pub authority: Signer<'info>,
}

#[account]
pub struct Agent {
    pub authority: Pubkey,
    pub config: AgentConfig,
    pub is_active: bool,
}

#[derive(AnchorSerialize, AnchorDeserialize, Clone)]
pub struct AgentConfig {
    pub trigger_condition: String,
    pub action_type: String,
    pub parameters: Vec<String>,
}

#[error_code]
pub enum AgentError {
    #[msg("Agent is not active")]
    Inactive,
}
""")

_EVM_AGENT = Template("""\
// SPDX-License-Identifier: MIT
// Generated $chain_name agent contract
pragma solidity ^0.8.20;

contract AIAgent {
    address public owner;
    string public prompt;
    bool public isActive;

    event AgentExecuted(string action, uint256 timestamp);

    constructor(string memory _prompt) {
        owner = msg.sender;
        prompt = _prompt;
        isActive = true;
    }

    modifier onlyOwner() {
        require(msg.sender == owner, "Not the owner");
        _;
    }

    function executeAgent() external onlyOwner {
        require(isActive, "Agent is not active");

        // Agent logic for: $prompt

        emit AgentExecuted("Agent executed", block.timestamp);
    }

    function setActive(bool _active) external onlyOwner {
        isActive = _active;
    }
}
""")

_SUI_AGENT = Template("""\
module ai_agent::agent {
    use sui::object::{Self, UID};
    use sui::transfer;
    use sui::tx_context::{Self, TxContext};

    const EAgentInactive: u64 = 0;

    struct Agent has key, store {
        id: UID,
        prompt: vector<u8>,
        is_active: bool,
    }

    public entry fun create_agent(prompt: vector<u8>, ctx: &mut TxContext) {
        let agent = Agent {
            id: object::new(ctx),
            prompt,
            is_active: true,
        };
        transfer::public_transfer(agent, tx_context::sender(ctx));
    }

    public entry fun execute(agent: &mut Agent) {
        // Agent logic for: $prompt
        assert!(agent.is_active, EAgentInactive);
    }

    public entry fun set_active(agent: &mut Agent, active: bool) {
        agent.is_active = active;
    }
}
""")

_XRP_AGENT = Template("""\
const xrpl = require('xrpl');

class XRPAgent {
    constructor(prompt) {
        this.prompt = prompt;
        this.isActive = true;
        this.client = null;
    }

    async connect() {
        this.client = new xrpl.Client('wss://s.altnet.rippletest.net:51233');
        await this.client.connect();
        console.log('Connected to XRP Ledger');
    }

    async execute() {
        if (!this.isActive) {
            throw new Error('Agent is not active');
        }

        // Agent logic for: $prompt
        const payment = {
            TransactionType: 'Payment',
            Account: 'your-account-address',
            Amount: '1000000',
            Destination: 'destination-address',
        };

        console.log('Agent executed:', this.prompt, payment);
    }

    setActive(active) {
        this.isActive = active;
    }

    async disconnect() {
        if (this.client) {
            await this.client.disconnect();
        }
    }
}

module.exports = XRPAgent;
""")

_FRONTEND: dict[ChainType, Template] = {
    ChainType.SOLANA: _SOLANA_FRONTEND,
    ChainType.SUI: _SUI_FRONTEND,
    ChainType.XRP: _XRP_FRONTEND,
}

_AGENT: dict[ChainType, Template] = {
    ChainType.SOLANA: _SOLANA_AGENT,
    ChainType.SUI: _SUI_AGENT,
    ChainType.XRP: _XRP_AGENT,
}


def _template_for(project_type: ProjectType, chain: ChainType) -> Template:
    if is_evm(chain):
        return _EVM_FRONTEND if project_type is ProjectType.FRONTEND else _EVM_AGENT
    table = _FRONTEND if project_type is ProjectType.FRONTEND else _AGENT
    return table[chain]


def fallback_code(prompt: str, project_type: ProjectType, chain: ChainType) -> str:
    """Render the static template for a (type, chain) pair."""
    template = _template_for(project_type, chain)
    return template.safe_substitute(prompt=prompt, chain_name=get_chain_config(chain).name)
