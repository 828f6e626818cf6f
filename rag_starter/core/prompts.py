"""
Answer prompts.

System instructions that restrict the model to retrieved context and
name the exact fallback sentence for unanswerable questions.

Dependencies: langchain_core.prompts
System role: Prompt templates for answer generation
"""

from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

FALLBACK_ANSWER = "I don't have enough information to answer that."

ANSWER_SYSTEM_PROMPT = (
    "You are a helpful AI assistant. Answer the user's question using ONLY the "
    f'context below. If the answer is not in the context, say: "{FALLBACK_ANSWER}"'
    "\n\nContext:\n{context}"
)

STREAMING_SYSTEM_PROMPT = (
    "You are a helpful AI assistant. Answer the user's question based ONLY on the "
    f'provided context. If the context doesn\'t contain the answer, say "{FALLBACK_ANSWER}"'
    """

Context:
{context}

Instructions:
- Answer the user's question directly and specifically
- Use ONLY information from the provided context
- Be concise and accurate
- If the answer is in the context, provide it clearly
- Do not ask follow-up questions unless specifically requested"""
)

# Single-shot answers see only the instruction and the current question
ANSWER_PROMPT = ChatPromptTemplate.from_messages([
    ("system", ANSWER_SYSTEM_PROMPT),
    ("human", "{question}"),
])

STREAMING_PROMPT = ChatPromptTemplate.from_messages([
    ("system", STREAMING_SYSTEM_PROMPT),
    MessagesPlaceholder(variable_name="history", optional=True),
])
