"""Tokens, versions, packet headers, packets, the packet queue and token packages of TDS."""